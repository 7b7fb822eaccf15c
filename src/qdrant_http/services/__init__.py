"""Application services."""

from .endpoint_pool import EndpointPool

__all__ = ["EndpointPool"]
