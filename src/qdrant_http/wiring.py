"""Composition root: builds settings-backed services.

Call ``build_endpoint_pool()`` to get a pool over every configured address.
"""

from __future__ import annotations

from .config.runtime import QdrantClientSettings, get_settings
from .services.endpoint_pool import EndpointPool


def build_endpoint_pool(settings: QdrantClientSettings | None = None) -> EndpointPool:
    """Construct an EndpointPool over the primary and failover addresses."""
    settings = settings or get_settings()
    return EndpointPool(settings.all_addresses)
