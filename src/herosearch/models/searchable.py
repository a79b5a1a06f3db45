"""Searchable base class — The contract a model implements to be indexed.

A searchable model describes how one entity is stored in the search index and
how a set of entities is loaded back from the application's own store. The
engine never persists entities itself; it only needs the hooks below.

Optional capabilities (``es_index_name``, ``searchable_fields``) return
``None`` by default, which tells the engine to fall back to its standard
behaviour.

Example:
    >>> class Widget(Searchable):
    ...     def __init__(self, id, name):
    ...         self.id, self.name = id, name
    ...
    ...     def to_searchable_array(self):
    ...         return {"id": self.id, "name": self.name}
    ...
    ...     @classmethod
    ...     def searchable_fields(cls):
    ...         return ["name"]
    ...
    ...     @classmethod
    ...     def get_scout_models_by_ids(cls, builder, ids):
    ...         return repository.find_many(ids)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from herosearch.models.builder import SearchBuilder


class Searchable(ABC):
    """Abstract base class for models stored in a search index."""

    # ── Identity ─────────────────────────────────────────────────────────

    @classmethod
    def get_scout_key_name(cls) -> str:
        """Name of the field holding the key. Used as the default sort field."""
        return "id"

    def get_scout_key(self) -> Any:
        """Value used as the document id in the index."""
        return getattr(self, self.get_scout_key_name())

    # ── Index description ────────────────────────────────────────────────

    @classmethod
    def searchable_as(cls) -> str:
        """Default index name for this model."""
        return f"{cls.__name__.lower()}s"

    @classmethod
    def es_index_name(cls) -> str | None:
        """Custom index name. Overrides both the prefix and ``searchable_as``."""
        return None

    @classmethod
    def searchable_fields(cls) -> list[str] | None:
        """Fields the full-text query runs against. ``None`` lets the index decide."""
        return None

    @classmethod
    def index_options(cls) -> dict[str, Any]:
        """Extra create-index options (mappings, settings) for this model's index."""
        return {}

    def to_searchable_array(self) -> dict[str, Any]:
        """Field map stored as the document body."""
        return {
            key: value
            for key, value in vars(self).items()
            if not key.startswith("_")
        }

    # ── Rehydration ──────────────────────────────────────────────────────

    @classmethod
    @abstractmethod
    def get_scout_models_by_ids(
        cls,
        builder: SearchBuilder,
        ids: list[str],
    ) -> Iterable[Searchable] | Awaitable[Iterable[Searchable]]:
        """Load the models with the given ids, in any order.

        May be a plain or an ``async`` method. Returned models are filtered
        against ``ids`` and re-ordered by the engine.
        """
