"""Search builder — Fluent description of one search against a model's index."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from herosearch.engines.base.exceptions import ConfigurationError
from herosearch.models.searchable import Searchable

if TYPE_CHECKING:
    from herosearch.engines.base.engine import Engine


class SortSpec(BaseModel):
    """A caller-supplied ``(column, direction)`` pair."""

    column: str
    direction: Literal["asc", "desc"] = "asc"


class SearchBuilder(BaseModel):
    """Query specification handed to an engine.

    Attributes:
        model: Searchable class (or instance) whose index is searched.
        query: Free-text query. Empty means "match everything".
        wheres: Equality filters, field name to value.
        orders: Sort specs in priority order.
        callback: Optional ``(client, SearchRequest) -> response`` hook that
            replaces the engine's own search call.
        limit: Optional cap on the number of hits (``take``).
        engine: Engine used by ``get``, ``keys``, ``paginate`` and ``raw``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: type[Searchable] | Searchable
    query: str = ""
    wheres: dict[str, Any] = Field(default_factory=dict)
    orders: list[SortSpec] = Field(default_factory=list)
    callback: Callable[..., Any] | None = None
    limit: int | None = Field(default=None, gt=0)
    engine: Any = Field(default=None, exclude=True)

    # ── Fluent API ───────────────────────────────────────────────────────

    def where(self, field: str, value: Any) -> SearchBuilder:
        self.wheres[field] = value
        return self

    def order_by(self, column: str, direction: str = "asc") -> SearchBuilder:
        self.orders.append(SortSpec(column=column, direction=direction.lower()))
        return self

    def take(self, limit: int) -> SearchBuilder:
        self.limit = limit
        return self

    # ── Execution ────────────────────────────────────────────────────────

    async def raw(self) -> Any:
        """Run the search and return the engine's raw response."""
        return await self._require_engine().search(self)

    async def get(self) -> list[Searchable]:
        """Run the search and return the matching models in rank order."""
        return await self._require_engine().get(self)

    async def keys(self) -> list[str]:
        """Run the search and return only the hit ids in rank order."""
        return await self._require_engine().keys(self)

    async def paginate(self, per_page: int = 15, page: int = 1) -> list[Searchable]:
        """Return one page of matching models (``page`` is 1-based)."""
        engine = self._require_engine()
        results = await engine.paginate(self, per_page, page)
        return await engine.map(self, results, self.model)

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise ConfigurationError("SearchBuilder has no engine. Pass engine=... when building the search.")
        return self.engine
