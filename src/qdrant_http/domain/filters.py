"""QdrantFilter: the aggregate root handed to search, scroll and count requests.

A filter is either built from conditions, in which case every top-level entry
is a group (bare leaves get wrapped into ``MustCondition``), or created from a
raw, already serialized filter string. Raw filters are opaque: they render
verbatim, report no payload fields and can't be combined with anything.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from ..errors import QdrantFilterArgumentError, QdrantFilterModificationForbiddenError
from .conditions import DISCARD_PAYLOAD_FIELD_NAME, FilterCondition
from .field_types import FieldNameType
from .groups import (
    FilterGroupConditionBase,
    as_top_level_group,
    build_filter_object,
)
from .optimization import ConditionOptimizationVisitor

_LOGGER = logging.getLogger(__name__)


class QdrantFilter:
    """Filter for Qdrant point queries."""

    EMPTY: QdrantFilter

    def __init__(self) -> None:
        # Use the factories; direct construction yields an empty filter.
        self._conditions: list[FilterGroupConditionBase] = []
        self._raw_filter_string: str | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self._conditions and not _has_text(self._raw_filter_string)

    @property
    def raw_filter_string(self) -> str | None:
        return self._raw_filter_string

    @property
    def conditions(self) -> tuple[FilterGroupConditionBase, ...]:
        return tuple(self._conditions)

    def _is_raw(self) -> bool:
        return _has_text(self._raw_filter_string)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_condition(cls, condition: FilterCondition | None) -> QdrantFilter:
        """Create a filter with a single top-level entry."""
        if condition is None:
            raise QdrantFilterArgumentError("condition must not be None")
        ret = cls()
        ret._conditions.append(as_top_level_group(condition))
        return ret

    @classmethod
    def create(cls, *conditions: FilterCondition) -> QdrantFilter:
        """Create a filter from any number of conditions; none yields ``EMPTY``."""
        if not conditions:
            return cls.EMPTY
        ret = cls()
        for condition in conditions:
            if condition is None:
                raise QdrantFilterArgumentError("conditions must not contain None")
            ret._conditions.append(as_top_level_group(condition))
        return ret

    @classmethod
    def from_conditions(cls, conditions: Sequence[FilterCondition] | None) -> QdrantFilter:
        """Create a filter from a non-empty list of conditions."""
        if not conditions:
            raise QdrantFilterArgumentError("conditions must be a non-empty list")
        ret = cls.from_condition(conditions[0])
        for condition in conditions[1:]:
            ret = cls.append(ret, condition)
        return ret

    @classmethod
    def from_raw_string(cls, raw_filter_string: str | None) -> QdrantFilter:
        """Create a filter from an already serialized filter string."""
        if not _has_text(raw_filter_string):
            raise QdrantFilterArgumentError("raw filter string must not be blank")
        ret = cls()
        ret._raw_filter_string = raw_filter_string
        _LOGGER.debug("raw_filter_created", extra={"length": len(raw_filter_string)})
        return ret

    # ------------------------------------------------------------------
    # Combination
    # ------------------------------------------------------------------

    @staticmethod
    def combine(target: QdrantFilter | None, source: QdrantFilter | None) -> QdrantFilter:
        """Append all top-level entries of ``source`` to ``target`` and return ``target``.

        A raw ``target`` is rejected even when ``source`` is empty.
        ``EMPTY`` is never mutated: combining into it returns a new filter.
        """
        if target is None:
            raise QdrantFilterArgumentError("target filter must not be None")
        if target._is_raw():
            raise QdrantFilterModificationForbiddenError(target._raw_filter_string)
        if source is None or source.is_empty:
            return target
        if source._is_raw():
            raise QdrantFilterModificationForbiddenError(source._raw_filter_string)

        if target is QdrantFilter.EMPTY:
            target = QdrantFilter()
        target._conditions.extend(source._conditions)
        return target

    @staticmethod
    def append(filter: QdrantFilter | None, condition: FilterCondition) -> QdrantFilter:
        """Add a condition to ``filter`` (in place) and return it."""
        if filter is not None and filter._is_raw():
            raise QdrantFilterModificationForbiddenError(filter._raw_filter_string)
        if filter is None or filter is QdrantFilter.EMPTY:
            return QdrantFilter.from_condition(condition)
        if condition is None:
            raise QdrantFilterArgumentError("condition must not be None")
        filter._conditions.append(as_top_level_group(condition))
        return filter

    def __add__(self, other: QdrantFilter | FilterCondition) -> QdrantFilter:
        if isinstance(other, QdrantFilter) or other is None:
            return QdrantFilter.combine(self, other)
        if isinstance(other, FilterCondition):
            return QdrantFilter.append(self, other)
        return NotImplemented

    __iadd__ = __add__

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_payload_fields_with_types(self) -> set[FieldNameType]:
        """Return the payload fields referenced by leaf conditions with their inferred types.

        Raw filters are opaque and report nothing.
        """
        if self.is_empty or self._is_raw():
            return set()
        fields: set[FieldNameType] = set()
        for condition in self._conditions:
            _collect_payload_fields(condition, fields)
        return fields

    # ------------------------------------------------------------------
    # Optimization
    # ------------------------------------------------------------------

    def optimize(self) -> QdrantFilter:
        """Rewrite top-level entries into equivalent, flatter forms. Returns self."""
        if self._is_raw() or not self._conditions:
            return self
        visitor = ConditionOptimizationVisitor()
        self._conditions = [visitor.visit(condition) for condition in self._conditions]
        _LOGGER.debug("filter_optimized", extra={"rewrites": visitor.rewrites})
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any] | None:
        """Return the filter as a JSON-compatible value; ``None`` when empty."""
        if self._is_raw():
            return json.loads(self._raw_filter_string)
        if not self._conditions:
            return None
        return build_filter_object(self._conditions)

    def to_json(self) -> str:
        """Return the text written as the ``filter`` member of a request body."""
        if self._is_raw():
            return self._raw_filter_string
        if not self._conditions:
            return "null"
        return self.render(indent=False)

    def render(self, indent: bool = False) -> str:
        """Build the filter string. An empty filter renders as ``""``."""
        if self._is_raw():
            return self._raw_filter_string
        if not self._conditions:
            return ""
        payload = build_filter_object(self._conditions)
        if indent:
            return json.dumps(payload, indent=2)
        return json.dumps(payload, separators=(",", ":"))

    def __str__(self) -> str:
        return self.render(indent=True)

    def __repr__(self) -> str:
        if self._is_raw():
            return f"QdrantFilter(raw={self._raw_filter_string!r})"
        return f"QdrantFilter(conditions={len(self._conditions)})"


QdrantFilter.EMPTY = QdrantFilter()


def _has_text(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _collect_payload_fields(condition: FilterCondition, fields: set[FieldNameType]) -> None:
    if isinstance(condition, FilterGroupConditionBase):
        for child in condition.conditions:
            _collect_payload_fields(child, fields)
        return
    name = condition.payload_field_name
    if name is None or name == DISCARD_PAYLOAD_FIELD_NAME:
        return
    fields.add(FieldNameType(name, condition.payload_field_type))
