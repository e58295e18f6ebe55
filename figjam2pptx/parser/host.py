"""Access helpers for host canvas objects.

Host nodes arrive either as live objects exposing attributes (the plugin
API shape) or as decoded JSON mappings (a selection dump). Every read goes
through these helpers so the extractors never care which one they got.
"""

import math
from collections.abc import Mapping
from typing import Any


class _Mixed:
    """Host marker for a property with several differing values."""

    _instance = None

    def __new__(cls) -> "_Mixed":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MIXED"


MIXED = _Mixed()

# Mixed values serialized by a host dump
MIXED_LITERAL = "mixed"


def is_mixed(value: Any) -> bool:
    """Check whether a value is the host's "mixed" marker."""
    return value is MIXED or (isinstance(value, str) and value == MIXED_LITERAL)


def has_field(obj: Any, key: str) -> bool:
    """Check whether a host object exposes a field at all."""
    if isinstance(obj, Mapping):
        return key in obj
    return hasattr(obj, key)


def get_field(obj: Any, key: str, default: Any = None) -> Any:
    """Read a field from a mapping or an attribute object."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def get_number(obj: Any, key: str, default: float = 0) -> float:
    """Read a finite number, falling back to ``default``.

    Booleans, mixed markers, missing fields and NaN/inf all count as absent.
    """
    value = get_field(obj, key)
    return as_number(value, default)


def as_number(value: Any, default: Any = 0) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return value


def get_sequence(obj: Any, key: str) -> list:
    """Read a list-like field; anything else yields an empty list."""
    value = get_field(obj, key)
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    try:
        return list(value)
    except TypeError:
        return []
