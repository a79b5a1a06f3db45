"""Elasticsearch engine."""

from herosearch.engines.elasticsearch.engine import ElasticsearchEngine

__all__ = ["ElasticsearchEngine"]
