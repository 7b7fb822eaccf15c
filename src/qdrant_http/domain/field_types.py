"""Payload field index types and the (name, type) pairs reported by filters."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any


class PayloadIndexedFieldType(str, Enum):
    """Payload index schema types, named as Qdrant names them."""

    keyword = "keyword"
    integer = "integer"
    float = "float"
    geo = "geo"
    text = "text"
    bool = "bool"
    datetime = "datetime"
    uuid = "uuid"


@dataclass(frozen=True)
class FieldNameType:
    """A payload field referenced by a filter together with its inferred index type."""

    name: str
    type: PayloadIndexedFieldType | None


def infer_field_type(value: Any) -> PayloadIndexedFieldType | None:
    """Infer the payload index type a matched value implies."""
    # bool is a subclass of int
    if isinstance(value, bool):
        return PayloadIndexedFieldType.bool
    if isinstance(value, int):
        return PayloadIndexedFieldType.integer
    if isinstance(value, float):
        return PayloadIndexedFieldType.float
    if isinstance(value, uuid.UUID):
        return PayloadIndexedFieldType.uuid
    if isinstance(value, (datetime, date)):
        return PayloadIndexedFieldType.datetime
    if isinstance(value, str):
        return PayloadIndexedFieldType.keyword
    return None
