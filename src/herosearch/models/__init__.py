"""Data models — searchable base class, query builder and request bodies."""

from herosearch.models.builder import SearchBuilder, SortSpec
from herosearch.models.searchable import Searchable

__all__ = ["Searchable", "SearchBuilder", "SortSpec"]
