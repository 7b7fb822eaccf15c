"""Concrete adapters for the official qdrant-client."""

from .qdrant_models import to_qdrant_filter

__all__ = ["to_qdrant_filter"]
