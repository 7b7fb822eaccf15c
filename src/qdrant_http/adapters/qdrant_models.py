"""Adapter: QdrantFilter -> qdrant-client ``models.Filter``.

Lets a filter built here be passed to ``QdrantClient.query_points``,
``scroll`` and ``count`` as ``query_filter`` / ``scroll_filter``.
"""

from __future__ import annotations

from typing import Any

from qdrant_client import models

from ..domain.filters import QdrantFilter

_CONDITION_LISTS = ("must", "must_not", "should")
_FILTER_KEYS = frozenset((*_CONDITION_LISTS, "min_should", "filter"))


def to_qdrant_filter(qdrant_filter: QdrantFilter | None) -> models.Filter | None:
    """Validate the filter's JSON against the qdrant-client model; empty gives None."""
    if qdrant_filter is None or qdrant_filter.is_empty:
        return None
    return models.Filter.model_validate(_to_model_filter(qdrant_filter.to_dict()))


def _to_model_filter(body: dict[str, Any]) -> dict[str, Any]:
    # qdrant-client has no ``filter`` member: a nested filter is a bare Filter in a condition list.
    out: dict[str, Any] = {}
    for key, value in body.items():
        if key == "filter":
            continue
        if key in _CONDITION_LISTS:
            out[key] = [_to_model_condition(c) for c in value]
        elif key == "min_should":
            out[key] = {
                **value,
                "conditions": [_to_model_condition(c) for c in value["conditions"]],
            }
        else:
            out[key] = value
    if "filter" in body:
        out["must"] = [*out.get("must", []), _to_model_filter(body["filter"])]
    return out


def _to_model_condition(condition: Any) -> Any:
    if not isinstance(condition, dict) or not condition.keys() & _FILTER_KEYS:
        return condition
    if condition.keys() == {"filter"}:
        return _to_model_filter(condition["filter"])
    return _to_model_filter(condition)
