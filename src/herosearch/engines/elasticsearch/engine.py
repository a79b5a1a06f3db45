"""Elasticsearch engine — Indexes searchable models and runs type-ahead searches.

The engine translates ``SearchBuilder`` objects into Elasticsearch query DSL
and maps hits back to models. It uses the asyncio ``elasticsearch`` client,
which it shares with the rest of the application and never reconfigures.

Usage::

    engine = ElasticsearchEngine(AsyncElasticsearch("http://localhost:9200"), index_prefix="staging")
    await engine.update([widget])
    widgets = await SearchBuilder(model=Widget, query="blue wid", engine=engine).get()
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping, Sequence, Set
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from elasticsearch import NotFoundError

from herosearch.engines.base.engine import Engine, EngineHealth
from herosearch.engines.base.exceptions import InvalidArgumentError, MalformedResponseError
from herosearch.engines.elasticsearch.analysis import build_index_body
from herosearch.engines.elasticsearch.client import create_client
from herosearch.models.requests import (
    DEFAULT_FROM,
    DEFAULT_SIZE,
    MAX_RESULT_WINDOW,
    BoolClause,
    DeleteRequest,
    IndexRequest,
    MatchClause,
    MultiMatchClause,
    QueryClause,
    SearchRequest,
    SortClause,
)

if TYPE_CHECKING:
    from herosearch.config.settings import Settings
    from herosearch.models.builder import SearchBuilder
    from herosearch.models.searchable import Searchable

logger = logging.getLogger(__name__)

IndexRecreator = Callable[[Any], Awaitable[Any]]

# Create-index options that would change how document ids are assigned
RESERVED_INDEX_OPTIONS = frozenset({"primaryKey", "primary_key"})


class ElasticsearchEngine(Engine):
    """Search engine backed by Elasticsearch (v8+).

    Args:
        client: Shared ``AsyncElasticsearch`` client.
        index_prefix: Prefix joined with ``_`` to every default index name.
        index_recreator: Coroutine function run by ``flush`` after the index is
            dropped. Defaults to ``create_model_index``.
    """

    def __init__(
        self,
        client: Any,
        index_prefix: str | None = None,
        index_recreator: IndexRecreator | None = None,
    ) -> None:
        self._client = client
        self._index_prefix = index_prefix or None
        self._index_recreator = index_recreator
        self._owns_client = False

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> ElasticsearchEngine:
        """Build an engine and its own client from application settings.

        The engine owns a client created this way; release it with ``close``.
        """
        engine = cls(
            create_client(settings.elasticsearch),
            index_prefix=settings.elasticsearch.index_prefix,
            **kwargs,
        )
        engine._owns_client = True
        return engine

    async def close(self) -> None:
        """Close the client if this engine created it."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    @property
    def name(self) -> str:
        return "elasticsearch"

    @property
    def client(self) -> Any:
        return self._client

    # ── Index naming ─────────────────────────────────────────────────────

    def index_name(self, model: type[Searchable] | Searchable) -> str:
        """Resolve the index a model lives in.

        A custom ``es_index_name`` wins, then the configured prefix joined to
        ``searchable_as``, then ``searchable_as`` alone.
        """
        custom = model.es_index_name()
        if custom:
            return custom
        if self._index_prefix:
            return f"{self._index_prefix}_{model.searchable_as()}"
        return model.searchable_as()

    # ── Indexing ─────────────────────────────────────────────────────────

    async def update(self, models: Iterable[Searchable]) -> None:
        """Index each model as its own document.

        Requests are sent one at a time. The first failure propagates and the
        remaining models are not sent; earlier ones stay indexed.
        """
        for model in models:
            request = IndexRequest(
                index=self.index_name(model),
                id=str(model.get_scout_key()),
                body=model.to_searchable_array(),
            )
            await self._client.index(**request.to_params())
            logger.debug("Indexed document %s in %s", request.id, request.index)

    async def delete(self, models: Iterable[Searchable]) -> None:
        """Remove each model's document. Documents that are already gone are skipped."""
        for model in models:
            request = DeleteRequest(index=self.index_name(model), id=str(model.get_scout_key()))
            try:
                await self._client.delete(**request.to_params())
            except NotFoundError:
                logger.debug("Document %s not found in %s, nothing to delete", request.id, request.index)
                continue
            logger.debug("Deleted document %s from %s", request.id, request.index)

    # ── Searching ────────────────────────────────────────────────────────

    async def search(self, builder: SearchBuilder) -> Any:
        """Run the builder's search, honouring ``builder.limit`` as the page size.

        Raises:
            InvalidArgumentError: If ``builder.limit`` is set but not between 1
                and ``MAX_RESULT_WINDOW``.
        """
        if builder.limit is None:
            return await self.perform_search(builder)
        if builder.limit <= 0 or builder.limit > MAX_RESULT_WINDOW:
            raise InvalidArgumentError(f"limit must be between 1 and {MAX_RESULT_WINDOW}, got {builder.limit}")
        options = {"size": builder.limit}
        return await self.perform_search(builder, options)

    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> Any:
        """Run one page of the builder's search.

        Raises:
            InvalidArgumentError: If ``page`` is below 1 or ``per_page`` is not
                between 1 and ``MAX_RESULT_WINDOW``.
        """
        if page < 1:
            raise InvalidArgumentError(f"page must be 1 or greater, got {page}")
        if per_page <= 0 or per_page > MAX_RESULT_WINDOW:
            raise InvalidArgumentError(f"per_page must be between 1 and {MAX_RESULT_WINDOW}, got {per_page}")

        return await self.perform_search(builder, {"from": (page - 1) * per_page, "size": per_page})

    async def perform_search(self, builder: SearchBuilder, options: Mapping[str, Any] | None = None) -> Any:
        """Build the search request and send it, or hand it to the builder's callback.

        Args:
            builder: The search to run.
            options: ``from`` / ``size`` overrides applied over the defaults.

        Returns:
            The raw client response, or whatever the callback returned.
        """
        request = self.build_search_request(builder, options)

        if builder.callback is not None:
            result = builder.callback(self._client, request)
            if inspect.isawaitable(result):
                result = await result
            return result

        start = time.monotonic()
        response = await self._client.search(index=request.index, body=request.to_body())
        logger.debug(
            "Searched %s (from=%d, size=%d) in %d ms",
            request.index,
            request.from_,
            request.size,
            int((time.monotonic() - start) * 1000),
        )
        return response

    def build_search_request(self, builder: SearchBuilder, options: Mapping[str, Any] | None = None) -> SearchRequest:
        """Assemble the ``SearchRequest`` for a builder without sending it."""
        must: list[QueryClause] = []

        if builder.query:
            must.append(
                MultiMatchClause(
                    query=builder.query,
                    fields=list(builder.model.searchable_fields() or []),
                    type="phrase_prefix",
                )
            )

        for field, value in builder.wheres.items():
            if not value:
                continue
            if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
                # Only the first element of a list filter is matched
                value = value[0]
            elif isinstance(value, Set):
                # Sets have no order; any one member is matched
                value = next(iter(value))
            must.append(MatchClause(field=field, value=value))

        if builder.orders:
            sort = [SortClause(field=order.column, direction=order.direction) for order in builder.orders]
        else:
            sort = [SortClause(field=builder.model.get_scout_key_name(), direction="desc")]

        params: dict[str, Any] = {
            "index": self.index_name(builder.model),
            "from": DEFAULT_FROM,
            "size": DEFAULT_SIZE,
            "query": BoolClause(must=must),
            "sort": sort,
        }
        params.update(options or {})
        return SearchRequest(**params)

    # ── Result mapping ───────────────────────────────────────────────────

    def map_ids(self, results: Any) -> list[str]:
        """Pluck hit ids in response order."""
        ids: list[str] = []
        for hit in self._hits(results):
            try:
                ids.append(str(hit["_id"]))
            except (KeyError, TypeError) as e:
                raise MalformedResponseError(f"Search hit has no '_id': {hit!r}") from e
        return ids

    def get_total_count(self, results: Any) -> int:
        """Return ``hits.total.value`` exactly as Elasticsearch reported it."""
        try:
            return results["hits"]["total"]["value"]
        except (KeyError, TypeError) as e:
            raise MalformedResponseError("Search response has no 'hits.total.value'") from e

    async def map(self, builder: SearchBuilder, results: Any, model: type[Searchable] | Searchable) -> list[Searchable]:
        """Load the models behind the hits, in hit order."""
        return await self._map_models(builder, results, model)

    async def lazy_map(
        self,
        builder: SearchBuilder,
        results: Any,
        model: type[Searchable] | Searchable,
    ) -> Iterator[Searchable]:
        """Like ``map``, returned as an iterator."""
        return iter(await self._map_models(builder, results, model))

    async def _map_models(
        self,
        builder: SearchBuilder,
        results: Any,
        model: type[Searchable] | Searchable,
    ) -> list[Searchable]:
        ids = self.map_ids(results)
        if not ids:
            return []

        positions: dict[str, int] = {}
        for rank, doc_id in enumerate(ids):
            positions.setdefault(doc_id, rank)

        found = model.get_scout_models_by_ids(builder, ids)
        if inspect.isawaitable(found):
            found = await found

        # The lookup may return stale or unrequested rows
        matched = [item for item in found if str(item.get_scout_key()) in positions]
        matched.sort(key=lambda item: positions[str(item.get_scout_key())])
        return matched

    @staticmethod
    def _hits(results: Any) -> list[Any]:
        try:
            hits = results["hits"]["hits"]
        except (KeyError, TypeError) as e:
            raise MalformedResponseError("Search response has no 'hits.hits'") from e
        if not isinstance(hits, list):
            raise MalformedResponseError(f"'hits.hits' must be a list, got {type(hits).__name__}")
        return hits

    # ── Index lifecycle ──────────────────────────────────────────────────

    async def flush(self, model: type[Searchable] | Searchable) -> None:
        """Drop the model's index, then recreate it empty.

        Every document in the index is lost until the models are re-imported.
        """
        index = self.index_name(model)
        await self._client.indices.delete(index=index)
        logger.info("Deleted index %s", index)

        if self._index_recreator is not None:
            await self._index_recreator(model)
        else:
            await self.create_model_index(model)

    async def create_index(self, name: str, options: dict[str, Any] | None = None) -> Any:
        """Create an index with the default analyzer, overlaid with *options*.

        Raises:
            InvalidArgumentError: If *options* tries to set the primary key.
        """
        options = options or {}
        reserved = RESERVED_INDEX_OPTIONS.intersection(options)
        if reserved:
            raise InvalidArgumentError(
                f"The document id field cannot be overridden (got {', '.join(sorted(reserved))})"
            )

        response = await self._client.indices.create(index=name, body=build_index_body(options))
        logger.info("Created index %s", name)
        return response

    async def create_model_index(self, model: type[Searchable] | Searchable) -> Any:
        """Create the index for a model using its ``index_options``."""
        return await self.create_index(self.index_name(model), model.index_options())

    async def delete_index(self, name: str) -> Any:
        """Delete an index by name."""
        response = await self._client.indices.delete(index=name)
        logger.info("Deleted index %s", name)
        return response

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> EngineHealth:
        """Check Elasticsearch cluster health."""
        if not self._client:
            return EngineHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return EngineHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            logger.warning("Elasticsearch health check failed: %s", e)
            return EngineHealth(status="unhealthy", message=str(e))
