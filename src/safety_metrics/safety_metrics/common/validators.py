from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError

MIN_YEAR = 1900


def require_year(value: Optional[str], *, default: int) -> int:
    if value is None or not str(value).strip():
        return default
    text = str(value).strip()
    if len(text) != 4 or not text.isdigit() or int(text) < MIN_YEAR:
        raise ValidationError(f"Año inválido: {value!r}")
    return int(text)


def optional_month(value: Optional[str]) -> Optional[int]:
    if value is None or not str(value).strip():
        return None
    text = str(value).strip()
    if not text.isdigit() or not 1 <= int(text) <= 12:
        raise ValidationError(f"Mes inválido: {value!r}")
    return int(text)


def optional_branch(value: Optional[str]) -> Optional[str]:
    """'todas' (or empty) means every branch of the selection."""
    text = (value or "").strip()
    if not text or text.lower() == "todas":
        return None
    return text
