"""Operation status returned by Qdrant API calls."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QdrantOperationStatusType(str, Enum):
    """Status values Qdrant reports for an operation."""

    ok = "ok"
    acknowledged = "acknowledged"
    completed = "completed"
    error = "error"
    unknown = "unknown"


_KNOWN_STATUSES = {
    QdrantOperationStatusType.ok.value: QdrantOperationStatusType.ok,
    QdrantOperationStatusType.acknowledged.value: QdrantOperationStatusType.acknowledged,
    QdrantOperationStatusType.completed.value: QdrantOperationStatusType.completed,
}


class QdrantStatus(BaseModel):
    """Result wrapper for a Qdrant operation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: QdrantOperationStatusType = Field(..., description="Operation status")
    error: str | None = Field(default=None, description="Error reported by Qdrant, if any")
    raw_status_string: str | None = Field(
        default=None,
        description="Raw status text; set only for statuses this client doesn't know",
    )
    exception: BaseException | None = Field(
        default=None,
        description="Exception raised while executing the operation",
    )

    @property
    def is_success(self) -> bool:
        return self.type == QdrantOperationStatusType.ok

    def get_error_message(self) -> str | None:
        """Return the error or the raw status text; None for a clean status."""
        return self.error if self.error is not None else self.raw_status_string

    @classmethod
    def parse(cls, raw: Any) -> QdrantStatus:
        """Build a status from the ``status`` member of a Qdrant response.

        Accepts a status string (``"ok"``, ``"acknowledged"``, ``"completed"``)
        or an error object ``{"error": "..."}``.
        """
        if isinstance(raw, str):
            known = _KNOWN_STATUSES.get(raw.strip().lower())
            if known is not None:
                return cls(type=known)
            return cls(type=QdrantOperationStatusType.unknown, raw_status_string=raw)
        if isinstance(raw, dict) and "error" in raw:
            return cls(type=QdrantOperationStatusType.error, error=str(raw["error"]))
        return cls(type=QdrantOperationStatusType.unknown, raw_status_string=str(raw))

    def __str__(self) -> str:
        return (
            f"[{self.type.value}]; IsSuccess: '{self.is_success}'; "
            f"Error: '{self.get_error_message() or 'NONE'}'; "
            f"Exception: {self.exception if self.exception is not None else 'NONE'}"
        )
