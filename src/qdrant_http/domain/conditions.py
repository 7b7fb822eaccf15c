"""Filter condition tree: the abstract node and the leaf conditions.

Every node renders itself to exactly one JSON object via ``to_json()``.
Leaves that constrain a payload field also report the field name and the
index type implied by the values they match, which is what
``QdrantFilter.get_payload_fields_with_types()`` collects.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .field_types import PayloadIndexedFieldType, infer_field_type

if TYPE_CHECKING:
    from .groups import MustCondition, MustNotCondition, ShouldCondition

# Field name reported by leaves that reference something other than a payload field.
DISCARD_PAYLOAD_FIELD_NAME = "__discard__"

MatchValue = bool | int | str | uuid.UUID


def _to_wire_value(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _normalize_dt(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class FilterCondition(BaseModel, ABC):
    """A node of the filter expression tree, leaf or group."""

    @property
    def payload_field_name(self) -> str | None:
        return None

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return None

    @abstractmethod
    def to_json(self) -> dict[str, Any]:
        """Return the JSON object this condition is written as."""

    def __and__(self, other: FilterCondition) -> MustCondition:
        from .groups import MustCondition

        return MustCondition(self, other)

    def __or__(self, other: FilterCondition) -> ShouldCondition:
        from .groups import ShouldCondition

        return ShouldCondition(self, other)

    def __invert__(self) -> MustNotCondition:
        from .groups import MustNotCondition

        return MustNotCondition(self)


class FieldCondition(FilterCondition, ABC):
    """A leaf constraining a single payload field."""

    key: str = Field(..., min_length=1, description="Payload field name (dotted path allowed)")

    @property
    def payload_field_name(self) -> str | None:
        return self.key


class FieldMatchCondition(FieldCondition):
    """Payload field equals a value."""

    value: MatchValue = Field(..., description="Exact value to match")

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return infer_field_type(self.value)

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "match": {"value": _to_wire_value(self.value)}}


class FieldMatchAnyCondition(FieldCondition):
    """Payload field equals any of the values."""

    values: list[MatchValue] = Field(default_factory=list, description="Candidate values")

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return infer_field_type(self.values[0]) if self.values else None

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "match": {"any": [_to_wire_value(v) for v in self.values]}}


class FieldMatchExceptCondition(FieldCondition):
    """Payload field equals none of the values."""

    values: list[MatchValue] = Field(default_factory=list, description="Excluded values")

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return infer_field_type(self.values[0]) if self.values else None

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "match": {"except": [_to_wire_value(v) for v in self.values]}}


class FieldMatchTextCondition(FieldCondition):
    """Full-text match against a text-indexed field."""

    text: str = Field(..., min_length=1, description="Text to search for")

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return PayloadIndexedFieldType.text

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "match": {"text": self.text}}


class _BoundsMixin(BaseModel):
    """Shared lt/gt/gte/lte bounds; at least one must be set."""

    @model_validator(mode="after")
    def _require_bound(self):
        if all(getattr(self, name) is None for name in ("lt", "gt", "gte", "lte")):
            raise ValueError("at least one of lt, gt, gte, lte must be set")
        return self

    def _bounds_json(self) -> dict[str, Any]:
        return {
            name: _to_wire_value(getattr(self, name))
            for name in ("lt", "gt", "gte", "lte")
            if getattr(self, name) is not None
        }


class FieldRangeCondition(_BoundsMixin, FieldCondition):
    """Numeric payload field within bounds."""

    lt: int | float | None = None
    gt: int | float | None = None
    gte: int | float | None = None
    lte: int | float | None = None

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        bounds = (self.lt, self.gt, self.gte, self.lte)
        if any(isinstance(b, float) for b in bounds):
            return PayloadIndexedFieldType.float
        return PayloadIndexedFieldType.integer

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "range": self._bounds_json()}


class FieldDateTimeRangeCondition(_BoundsMixin, FieldCondition):
    """Datetime payload field within bounds. Naive datetimes are taken as UTC."""

    lt: datetime | None = None
    gt: datetime | None = None
    gte: datetime | None = None
    lte: datetime | None = None

    @field_validator("lt", "gt", "gte", "lte")
    @classmethod
    def _ensure_tz(cls, value: datetime | None) -> datetime | None:
        return _normalize_dt(value)

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return PayloadIndexedFieldType.datetime

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "range": self._bounds_json()}


class FieldValuesCountCondition(_BoundsMixin, FieldCondition):
    """Number of values stored in an array payload field within bounds."""

    lt: int | None = Field(default=None, ge=0)
    gt: int | None = Field(default=None, ge=0)
    gte: int | None = Field(default=None, ge=0)
    lte: int | None = Field(default=None, ge=0)

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "values_count": self._bounds_json()}


class FieldIsNullCondition(FieldCondition):
    """Payload field is explicitly null."""

    def to_json(self) -> dict[str, Any]:
        return {"is_null": {"key": self.key}}


class FieldIsEmptyCondition(FieldCondition):
    """Payload field is missing, null or an empty array."""

    def to_json(self) -> dict[str, Any]:
        return {"is_empty": {"key": self.key}}


class GeoPoint(BaseModel):
    """A point on the globe."""

    lon: float = Field(..., ge=-180, le=180, description="Longitude")
    lat: float = Field(..., ge=-90, le=90, description="Latitude")

    def to_json(self) -> dict[str, float]:
        return {"lon": self.lon, "lat": self.lat}


class GeoRadiusCondition(FieldCondition):
    """Geo payload field within ``radius`` meters of ``center``."""

    center: GeoPoint
    radius: float = Field(..., gt=0, description="Radius in meters")

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return PayloadIndexedFieldType.geo

    def to_json(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "geo_radius": {"center": self.center.to_json(), "radius": self.radius},
        }


class GeoBoundingBoxCondition(FieldCondition):
    """Geo payload field inside a bounding box."""

    top_left: GeoPoint
    bottom_right: GeoPoint

    @property
    def payload_field_type(self) -> PayloadIndexedFieldType | None:
        return PayloadIndexedFieldType.geo

    def to_json(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "geo_bounding_box": {
                "top_left": self.top_left.to_json(),
                "bottom_right": self.bottom_right.to_json(),
            },
        }


class HasAnyIdCondition(FilterCondition):
    """Point id is one of ``ids``."""

    ids: list[int | str | uuid.UUID] = Field(..., min_length=1, description="Point ids")

    def to_json(self) -> dict[str, Any]:
        return {"has_id": [_to_wire_value(i) for i in self.ids]}


class HasNamedVectorCondition(FilterCondition):
    """Point has a value stored for the named vector.

    The name refers to a vector, not a payload key, so the condition reports
    the discard field name and never an index type.
    """

    vector_name: str = Field(..., min_length=1, description="Named vector identifier")

    @property
    def payload_field_name(self) -> str | None:
        return DISCARD_PAYLOAD_FIELD_NAME

    def to_json(self) -> dict[str, Any]:
        return {"has_vector": self.vector_name}
