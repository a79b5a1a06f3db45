"""Base engine interface — Abstract classes for search engine backends."""

from herosearch.engines.base.engine import Engine, EngineHealth

__all__ = ["Engine", "EngineHealth"]
