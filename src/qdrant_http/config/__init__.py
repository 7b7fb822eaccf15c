"""Client configuration."""

from .runtime import DEFAULT_HTTP_CLIENT_TIMEOUT, QdrantClientSettings, get_settings

__all__ = ["DEFAULT_HTTP_CLIENT_TIMEOUT", "QdrantClientSettings", "get_settings"]
