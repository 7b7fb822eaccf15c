"""Client-layer exceptions."""


class QdrantClientError(Exception):
    """Base exception for the qdrant_http package."""


class QdrantFilterArgumentError(QdrantClientError, ValueError):
    """Raised when a filter is built from missing or blank input."""


class QdrantFilterModificationForbiddenError(QdrantClientError):
    """Raised when a raw-string filter is combined with anything."""

    def __init__(self, raw_filter_string: str) -> None:
        self.raw_filter_string = raw_filter_string
        super().__init__(
            "Filters created from a raw filter string can't be modified or combined. "
            f"Raw filter: {raw_filter_string}"
        )


class CircleDetectedError(QdrantClientError, RuntimeError):
    """Raised when a circular sequence would start its next full rotation."""


class EmptySequenceError(QdrantClientError, ValueError):
    """Raised when a circular sequence is created from zero items."""


class NoHealthyEndpointError(QdrantClientError):
    """Raised when every endpoint in the pool failed."""
