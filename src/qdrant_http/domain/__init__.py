"""Domain layer: filter condition tree, QdrantFilter and the circular sequence."""

from .builders import Q
from .circular import CircularSequence, CycleDetector
from .conditions import (
    DISCARD_PAYLOAD_FIELD_NAME,
    FieldCondition,
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
)
from .field_types import FieldNameType, PayloadIndexedFieldType, infer_field_type
from .filters import QdrantFilter
from .groups import (
    FilterGroupCondition,
    FilterGroupConditionBase,
    MinimumShouldCondition,
    MustCondition,
    MustNotCondition,
    ShouldCondition,
    is_top_level_group,
)
from .optimization import ConditionOptimizationVisitor

__all__ = [
    "CircularSequence",
    "ConditionOptimizationVisitor",
    "CycleDetector",
    "DISCARD_PAYLOAD_FIELD_NAME",
    "FieldCondition",
    "FieldDateTimeRangeCondition",
    "FieldIsEmptyCondition",
    "FieldIsNullCondition",
    "FieldMatchAnyCondition",
    "FieldMatchCondition",
    "FieldMatchExceptCondition",
    "FieldMatchTextCondition",
    "FieldNameType",
    "FieldRangeCondition",
    "FieldValuesCountCondition",
    "FilterCondition",
    "FilterGroupCondition",
    "FilterGroupConditionBase",
    "GeoBoundingBoxCondition",
    "GeoPoint",
    "GeoRadiusCondition",
    "HasAnyIdCondition",
    "HasNamedVectorCondition",
    "MinimumShouldCondition",
    "MustCondition",
    "MustNotCondition",
    "PayloadIndexedFieldType",
    "Q",
    "QdrantFilter",
    "ShouldCondition",
    "infer_field_type",
    "is_top_level_group",
]
