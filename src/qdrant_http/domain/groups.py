"""Group conditions: structural nodes combining child conditions.

A group is written as ``{clause_key: body}``. When several groups form one
filter object their members are merged: repeated ``must`` / ``must_not``
arrays are concatenated (AND and AND-NOT compose that way), any other
repeated clause is nested into ``must`` so the object never carries a
duplicate member name.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, ClassVar, Iterable

from pydantic import Field

from .conditions import FilterCondition

_CONCATENATED_CLAUSES = frozenset({"must", "must_not"})


class FilterGroupConditionBase(FilterCondition, ABC):
    """A condition owning an ordered list of child conditions."""

    clause_key: ClassVar[str]

    conditions: list[FilterCondition] = Field(default_factory=list)

    def __init__(self, *conditions: FilterCondition, **data: Any) -> None:
        if conditions:
            data["conditions"] = list(conditions)
        super().__init__(**data)

    def to_json(self) -> dict[str, Any]:
        return {self.clause_key: self._body_json()}

    def _body_json(self) -> Any:
        return [condition.to_json() for condition in self.conditions]


class MustCondition(FilterGroupConditionBase):
    """All children must match."""

    clause_key: ClassVar[str] = "must"


class MustNotCondition(FilterGroupConditionBase):
    """None of the children may match."""

    clause_key: ClassVar[str] = "must_not"


class ShouldCondition(FilterGroupConditionBase):
    """At least one child must match."""

    clause_key: ClassVar[str] = "should"


class MinimumShouldCondition(FilterGroupConditionBase):
    """At least ``min_count`` children must match."""

    clause_key: ClassVar[str] = "min_should"

    min_count: int = Field(..., ge=1, description="Minimum number of matching children")

    def _body_json(self) -> Any:
        return {
            "conditions": [condition.to_json() for condition in self.conditions],
            "min_count": self.min_count,
        }


class FilterGroupCondition(FilterGroupConditionBase):
    """A nested filter object built from the children."""

    clause_key: ClassVar[str] = "filter"

    def _body_json(self) -> Any:
        return build_filter_object(as_top_level_group(c) for c in self.conditions)


_TOP_LEVEL_GROUP_TYPES = (
    MustCondition,
    MustNotCondition,
    ShouldCondition,
    MinimumShouldCondition,
    FilterGroupCondition,
)


def is_top_level_group(condition: FilterCondition) -> bool:
    """True if the condition may sit at a filter's top level without wrapping."""
    return isinstance(condition, _TOP_LEVEL_GROUP_TYPES)


def as_top_level_group(condition: FilterCondition) -> FilterGroupConditionBase:
    """Return the condition itself if it is a group, else wrap it in ``MustCondition``."""
    if is_top_level_group(condition):
        return condition
    return MustCondition(condition)


def build_filter_object(groups: Iterable[FilterGroupConditionBase]) -> dict[str, Any]:
    """Merge the members written by each group into one filter object."""
    merged: dict[str, Any] = {}
    for group in groups:
        for key, body in group.to_json().items():
            if key not in merged:
                merged[key] = body
            elif key in _CONCATENATED_CLAUSES:
                merged[key] = merged[key] + body
            else:
                merged["must"] = merged.get("must", []) + [{key: body}]
    return merged
