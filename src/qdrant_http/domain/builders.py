"""Q: shorthand factory for filter conditions.

    Q.must(Q.match_value("city", "London"), Q.range("age", gte=18))
    Q.match_value("color", "red") | Q.match_value("color", "blue")
"""

from __future__ import annotations

import uuid
from datetime import datetime

from .conditions import (
    FieldDateTimeRangeCondition,
    FieldIsEmptyCondition,
    FieldIsNullCondition,
    FieldMatchAnyCondition,
    FieldMatchCondition,
    FieldMatchExceptCondition,
    FieldMatchTextCondition,
    FieldRangeCondition,
    FieldValuesCountCondition,
    FilterCondition,
    GeoBoundingBoxCondition,
    GeoPoint,
    GeoRadiusCondition,
    HasAnyIdCondition,
    HasNamedVectorCondition,
    MatchValue,
)
from .groups import (
    FilterGroupCondition,
    MinimumShouldCondition,
    MustCondition,
    MustNotCondition,
    ShouldCondition,
)

Number = int | float


class Q:
    """Static factory methods for every condition kind."""

    # --- groups ---

    @staticmethod
    def must(*conditions: FilterCondition) -> MustCondition:
        return MustCondition(*conditions)

    @staticmethod
    def must_not(*conditions: FilterCondition) -> MustNotCondition:
        return MustNotCondition(*conditions)

    @staticmethod
    def should(*conditions: FilterCondition) -> ShouldCondition:
        return ShouldCondition(*conditions)

    @staticmethod
    def min_should(min_count: int, *conditions: FilterCondition) -> MinimumShouldCondition:
        return MinimumShouldCondition(*conditions, min_count=min_count)

    @staticmethod
    def nested_filter(*conditions: FilterCondition) -> FilterGroupCondition:
        return FilterGroupCondition(*conditions)

    # --- match ---

    @staticmethod
    def match_value(key: str, value: MatchValue) -> FieldMatchCondition:
        return FieldMatchCondition(key=key, value=value)

    @staticmethod
    def match_any(key: str, *values: MatchValue) -> FieldMatchAnyCondition:
        return FieldMatchAnyCondition(key=key, values=list(values))

    @staticmethod
    def match_except(key: str, *values: MatchValue) -> FieldMatchExceptCondition:
        return FieldMatchExceptCondition(key=key, values=list(values))

    @staticmethod
    def match_text(key: str, text: str) -> FieldMatchTextCondition:
        return FieldMatchTextCondition(key=key, text=text)

    # --- ranges ---

    @staticmethod
    def range(
        key: str,
        *,
        lt: Number | None = None,
        gt: Number | None = None,
        gte: Number | None = None,
        lte: Number | None = None,
    ) -> FieldRangeCondition:
        return FieldRangeCondition(key=key, lt=lt, gt=gt, gte=gte, lte=lte)

    @staticmethod
    def datetime_range(
        key: str,
        *,
        lt: datetime | None = None,
        gt: datetime | None = None,
        gte: datetime | None = None,
        lte: datetime | None = None,
    ) -> FieldDateTimeRangeCondition:
        return FieldDateTimeRangeCondition(key=key, lt=lt, gt=gt, gte=gte, lte=lte)

    @staticmethod
    def values_count(
        key: str,
        *,
        lt: int | None = None,
        gt: int | None = None,
        gte: int | None = None,
        lte: int | None = None,
    ) -> FieldValuesCountCondition:
        return FieldValuesCountCondition(key=key, lt=lt, gt=gt, gte=gte, lte=lte)

    # --- presence ---

    @staticmethod
    def is_null(key: str) -> FieldIsNullCondition:
        return FieldIsNullCondition(key=key)

    @staticmethod
    def is_empty(key: str) -> FieldIsEmptyCondition:
        return FieldIsEmptyCondition(key=key)

    # --- geo ---

    @staticmethod
    def geo_radius(key: str, lon: float, lat: float, radius: float) -> GeoRadiusCondition:
        return GeoRadiusCondition(key=key, center=GeoPoint(lon=lon, lat=lat), radius=radius)

    @staticmethod
    def geo_bounding_box(
        key: str,
        top_left: tuple[float, float],
        bottom_right: tuple[float, float],
    ) -> GeoBoundingBoxCondition:
        """Corners are ``(lon, lat)`` tuples."""
        return GeoBoundingBoxCondition(
            key=key,
            top_left=GeoPoint(lon=top_left[0], lat=top_left[1]),
            bottom_right=GeoPoint(lon=bottom_right[0], lat=bottom_right[1]),
        )

    # --- ids and vectors ---

    @staticmethod
    def has_id(*ids: int | str | uuid.UUID) -> HasAnyIdCondition:
        return HasAnyIdCondition(ids=list(ids))

    @staticmethod
    def has_vector(vector_name: str) -> HasNamedVectorCondition:
        return HasNamedVectorCondition(vector_name=vector_name)
