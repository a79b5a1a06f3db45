"""Base engine — Abstract interface for search engine backends.

An engine is responsible for:
  1. Writing searchable models to the backend index and removing them
  2. Translating a ``SearchBuilder`` into a backend search request
  3. Mapping raw backend responses back to ids and ordered models
  4. Managing the lifecycle of the backend index
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from herosearch.models.builder import SearchBuilder
    from herosearch.models.searchable import Searchable


class EngineHealth(BaseModel):
    """Health status of a search engine backend."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class Engine(ABC):
    """Abstract base class for search engines.

    Engines hold a shared client handle and no other mutable state, so a
    single instance can serve any number of concurrent callers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique engine name (e.g., 'elasticsearch')."""

    # ── Indexing ─────────────────────────────────────────────────────────

    @abstractmethod
    async def update(self, models: Iterable[Searchable]) -> None:
        """Add or replace the given models in the index."""

    @abstractmethod
    async def delete(self, models: Iterable[Searchable]) -> None:
        """Remove the given models from the index."""

    # ── Searching ────────────────────────────────────────────────────────

    @abstractmethod
    async def search(self, builder: SearchBuilder) -> Any:
        """Execute the builder's search and return the raw response."""

    @abstractmethod
    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> Any:
        """Execute one page of the builder's search and return the raw response.

        Args:
            builder: The search to run.
            per_page: Hits per page, greater than zero.
            page: 1-based page number.
        """

    # ── Result mapping ───────────────────────────────────────────────────

    @abstractmethod
    def map_ids(self, results: Any) -> list[str]:
        """Pluck the hit ids of a raw response, in rank order."""

    @abstractmethod
    async def map(self, builder: SearchBuilder, results: Any, model: type[Searchable] | Searchable) -> list[Searchable]:
        """Map a raw response to model instances, in rank order."""

    @abstractmethod
    async def lazy_map(
        self,
        builder: SearchBuilder,
        results: Any,
        model: type[Searchable] | Searchable,
    ) -> Iterator[Searchable]:
        """Same as ``map`` but returns an iterator over the models."""

    @abstractmethod
    def get_total_count(self, results: Any) -> int:
        """Total number of matches reported by a raw response."""

    # ── Index lifecycle ──────────────────────────────────────────────────

    @abstractmethod
    async def flush(self, model: type[Searchable] | Searchable) -> None:
        """Drop every record of the model from the backend."""

    @abstractmethod
    async def create_index(self, name: str, options: dict[str, Any] | None = None) -> Any:
        """Create a backend index."""

    @abstractmethod
    async def delete_index(self, name: str) -> Any:
        """Delete a backend index."""

    @abstractmethod
    async def health_check(self) -> EngineHealth:
        """Check the health of the search backend."""

    # ── Conveniences ─────────────────────────────────────────────────────

    async def get(self, builder: SearchBuilder) -> list[Searchable]:
        """Search and map in one step."""
        return await self.map(builder, await self.search(builder), builder.model)

    async def keys(self, builder: SearchBuilder) -> list[str]:
        """Search and return only the hit ids."""
        return self.map_ids(await self.search(builder))
