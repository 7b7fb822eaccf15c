"""Pydantic-based client settings.

Loads from ``QDRANT_*`` environment variables (with optional .env file).
Invalid values fail fast when the settings object is built.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_HTTP_CLIENT_TIMEOUT = timedelta(seconds=100)


def _normalize_address(value: str) -> str:
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"address must start with http:// or https://, got {value!r}")
    return value.rstrip("/")


class QdrantClientSettings(BaseSettings):
    """Connection settings for the Qdrant HTTP API."""

    model_config = {"env_prefix": "QDRANT_", "env_file": ".env", "env_file_encoding": "utf-8"}

    # --- Endpoints ---
    http_address: str = Field(
        default="http://localhost:6333",
        description="HTTP or HTTPS host and port Qdrant listens on",
    )
    failover_addresses: list[str] = Field(
        default_factory=list,
        description="Additional cluster node addresses tried after the primary one",
    )

    # --- Auth ---
    api_key: str | None = Field(
        default=None,
        description="If set, every request carries an 'api-key' header with this value",
    )

    # --- Limits ---
    http_client_timeout: timedelta = Field(
        default=DEFAULT_HTTP_CLIENT_TIMEOUT,
        description="Timeout for calls to the Qdrant HTTP API",
    )

    @field_validator("http_address")
    @classmethod
    def _check_address(cls, v: str) -> str:
        return _normalize_address(v)

    @field_validator("failover_addresses")
    @classmethod
    def _check_failover_addresses(cls, v: list[str]) -> list[str]:
        return [_normalize_address(address) for address in v]

    @field_validator("http_client_timeout")
    @classmethod
    def _positive_timeout(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError(f"http_client_timeout must be positive, got {v}")
        return v

    @property
    def all_addresses(self) -> list[str]:
        """Primary address first, then failovers, without duplicates."""
        return list(dict.fromkeys([self.http_address, *self.failover_addresses]))


@lru_cache(maxsize=1)
def get_settings() -> QdrantClientSettings:
    """Return the singleton QdrantClientSettings (cached after first call)."""
    return QdrantClientSettings()
