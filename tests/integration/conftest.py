"""Integration test fixtures — Elasticsearch running in Docker.

Expects a single-node cluster at localhost:9200, e.g.::

    docker run -p 9200:9200 -e discovery.type=single-node \
        -e xpack.security.enabled=false docker.elastic.co/elasticsearch/elasticsearch:8.13.4
"""

from __future__ import annotations

import time

import httpx
import pytest
from elasticsearch import AsyncElasticsearch

from herosearch.engines.elasticsearch.engine import ElasticsearchEngine

ES_HOST = "http://localhost:9200"
INDEX_PREFIX = "herosearch_it"


def _wait_for_service(url: str, timeout: float = 120.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=30)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure Elasticsearch is running and drop indices left by earlier runs."""
    if not _wait_for_service(ES_HOST, timeout=30.0):
        pytest.skip(f"Elasticsearch not available at {ES_HOST}")
    httpx.delete(f"{ES_HOST}/{INDEX_PREFIX}_*", params={"ignore_unavailable": "true"}, timeout=30)
    return ES_HOST


@pytest.fixture
async def es_engine(elasticsearch_ready: str):
    client = AsyncElasticsearch(elasticsearch_ready)
    engine = ElasticsearchEngine(client, index_prefix=INDEX_PREFIX)
    yield engine
    await client.close()
