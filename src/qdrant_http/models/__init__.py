"""Response models."""

from .status import QdrantOperationStatusType, QdrantStatus

__all__ = ["QdrantOperationStatusType", "QdrantStatus"]
