"""Tests for the Elasticsearch client factory."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from herosearch.config.settings import ElasticsearchSettings
from herosearch.engines.base.exceptions import ConfigurationError
from herosearch.engines.elasticsearch.client import create_client


class TestCreateClient:
    def test_minimal_kwargs(self) -> None:
        with patch("herosearch.engines.elasticsearch.client.AsyncElasticsearch") as factory:
            create_client(ElasticsearchSettings(hosts=["http://es:9200"]))

        factory.assert_called_once_with(hosts=["http://es:9200"], verify_certs=True, request_timeout=30.0)

    def test_auth_and_extra(self) -> None:
        settings = ElasticsearchSettings(
            hosts=["https://es:9200"],
            username="elastic",
            password="secret",
            api_key="abc==",
            extra={"max_retries": 5},
        )
        with patch("herosearch.engines.elasticsearch.client.AsyncElasticsearch") as factory:
            create_client(settings)

        kwargs = factory.call_args.kwargs
        assert kwargs["basic_auth"] == ("elastic", "secret")
        assert kwargs["api_key"] == "abc=="
        assert kwargs["max_retries"] == 5

    def test_no_hosts(self) -> None:
        with pytest.raises(ConfigurationError, match="host"):
            create_client(ElasticsearchSettings(hosts=[]))

    def test_half_basic_auth(self) -> None:
        with pytest.raises(ConfigurationError, match="username and a password"):
            create_client(ElasticsearchSettings(username="elastic"))
