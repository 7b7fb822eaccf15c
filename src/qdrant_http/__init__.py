"""Qdrant HTTP client: filter construction, serialization and endpoint rotation."""

from .config.runtime import QdrantClientSettings, get_settings
from .domain import (
    CircularSequence,
    FieldNameType,
    FilterCondition,
    PayloadIndexedFieldType,
    Q,
    QdrantFilter,
)
from .errors import (
    CircleDetectedError,
    EmptySequenceError,
    NoHealthyEndpointError,
    QdrantClientError,
    QdrantFilterArgumentError,
    QdrantFilterModificationForbiddenError,
)
from .models import QdrantOperationStatusType, QdrantStatus

__version__ = "0.1.0"
__all__ = [
    "CircleDetectedError",
    "CircularSequence",
    "EmptySequenceError",
    "FieldNameType",
    "FilterCondition",
    "NoHealthyEndpointError",
    "PayloadIndexedFieldType",
    "Q",
    "QdrantClientError",
    "QdrantClientSettings",
    "QdrantFilter",
    "QdrantFilterArgumentError",
    "QdrantFilterModificationForbiddenError",
    "QdrantOperationStatusType",
    "QdrantStatus",
    "get_settings",
]
