"""Client factory — Builds an ``AsyncElasticsearch`` client from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from elasticsearch import AsyncElasticsearch

from herosearch.engines.base.exceptions import ConfigurationError

if TYPE_CHECKING:
    from herosearch.config.settings import ElasticsearchSettings

logger = logging.getLogger(__name__)


def create_client(settings: ElasticsearchSettings) -> AsyncElasticsearch:
    """Create an ``AsyncElasticsearch`` client.

    Args:
        settings: Connection settings.

    Returns:
        A client that has not yet contacted the cluster.

    Raises:
        ConfigurationError: If no hosts are configured or the credentials
            are incomplete.
    """
    if not settings.hosts:
        raise ConfigurationError("At least one Elasticsearch host is required.")
    if bool(settings.username) != bool(settings.password):
        raise ConfigurationError("Elasticsearch basic auth needs both a username and a password.")

    client_kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "verify_certs": settings.verify_certs,
        "request_timeout": settings.request_timeout,
    }
    if settings.username and settings.password:
        client_kwargs["basic_auth"] = (settings.username, settings.password)
    if settings.api_key:
        client_kwargs["api_key"] = settings.api_key

    client_kwargs.update(settings.extra)

    logger.debug("Creating Elasticsearch client for hosts: %s", settings.hosts)
    return AsyncElasticsearch(**client_kwargs)
