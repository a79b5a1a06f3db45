"""Shared test fixtures and configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from herosearch.config.settings import Settings
from herosearch.engines.elasticsearch.engine import ElasticsearchEngine
from tests.fakes import Widget, make_response

# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        elasticsearch={"hosts": ["http://localhost:9200"], "index_prefix": "test"},
    )


@pytest.fixture
def es_client() -> MagicMock:
    """Mock ``AsyncElasticsearch`` client."""
    client = MagicMock()
    client.index = AsyncMock(return_value={"result": "created"})
    client.delete = AsyncMock(return_value={"result": "deleted"})
    client.search = AsyncMock(return_value=make_response([]))
    client.close = AsyncMock()
    client.indices = MagicMock()
    client.indices.create = AsyncMock(return_value={"acknowledged": True})
    client.indices.delete = AsyncMock(return_value={"acknowledged": True})
    client.cluster = MagicMock()
    client.cluster.health = AsyncMock(
        return_value={"status": "green", "cluster_name": "test-cluster", "number_of_nodes": 1}
    )
    return client


@pytest.fixture
def engine(es_client: MagicMock) -> ElasticsearchEngine:
    return ElasticsearchEngine(es_client)


@pytest.fixture
def widgets() -> list[Widget]:
    rows = [
        Widget(1, "Blue e-mail widget"),
        Widget(2, "Red widget", colour="red"),
        Widget(3, "Green sprocket2000", colour="green"),
        Widget(4, "Blue sprocket"),
    ]
    Widget.store = {str(w.id): w for w in rows}
    return rows
