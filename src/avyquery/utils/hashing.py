"""Utilities for turning query parameters into hashable key parts."""

from collections.abc import Hashable, Mapping
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


def freeze_value(value: Any) -> Hashable:
    """Create a deterministic, hashable form of a value.

    Mappings become tuples of ``(key, value)`` pairs sorted by key, so two
    mappings with the same items freeze identically whatever their insertion
    order. Sequences keep their order. Aware datetimes are normalized to UTC.

    Args:
        value: Any parameter value.

    Returns:
        A hashable value; equal inputs always give equal outputs.
    """
    if value is None or isinstance(value, (bool, int, float, str, bytes)):
        return value
    if isinstance(value, Enum):
        return freeze_value(value.value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return tuple(
            sorted((str(key), freeze_value(item)) for key, item in value.items())
        )
    if isinstance(value, (set, frozenset)):
        return tuple(sorted((freeze_value(item) for item in value), key=repr))
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    if isinstance(value, Hashable):
        return value
    return str(value)
