"""Lenient readers for loosely-structured store records.

Every helper is total: malformed input degrades to a documented default.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

TRUTHY_STRINGS = frozenset({"true", "1", "sí", "si"})


def normalize_text(value: Any) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def first_text(record: Mapping[str, Any], *fields: str) -> str:
    """First truthy value among `fields`, normalized (JS `a || b` semantics)."""
    for name in fields:
        value = record.get(name)
        if value:
            return normalize_text(value)
    return ""


def positive_number(value: Any) -> Optional[float]:
    """Return value as float when it is a real number > 0, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value != value or value <= 0:
        return None
    return float(value)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == value


def is_truthy_flag(value: Any) -> bool:
    """Boolean-like check: True, positive numbers and "true"/"1"/"sí"/"si"."""
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value > 0
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return False


def as_str_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None
