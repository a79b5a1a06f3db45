"""HeroSearch — Elasticsearch engine for searchable models."""

__version__ = "0.1.0"
