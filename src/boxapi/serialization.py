"""JSON serialization for request bodies."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any


def strip_nulls(value: Any) -> Any:
    """Return ``value`` with every ``None`` member removed, recursively."""

    if is_dataclass(value) and not isinstance(value, type):
        return {
            item.name: strip_nulls(getattr(value, item.name))
            for item in fields(value)
            if getattr(value, item.name) is not None
        }
    if isinstance(value, Mapping):
        return {key: strip_nulls(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [strip_nulls(item) for item in value if item is not None]
    return value


def to_json(value: Any) -> str:
    """Serialize a request body, omitting absent members."""

    return json.dumps(strip_nulls(value), separators=(",", ":"))


__all__ = ["strip_nulls", "to_json"]
