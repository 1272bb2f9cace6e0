from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from ..core.constants import DAY_SECONDS


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier. The engine itself never
    calls this; `now` is passed in explicitly.
    """
    return datetime.now()


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        return None


def _naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def to_datetime(value: Any) -> Optional[datetime]:
    """Coerce a stored timestamp into a naive local datetime.

    Accepts datetime/date objects, epoch milliseconds, ISO-8601 strings and
    exported store timestamps (``{"seconds": ...}`` / ``{"_seconds": ...}``).
    Returns None for anything that cannot be interpreted.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return _naive(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min)

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if value != value:  # NaN
            return None
        return _from_epoch(value / 1000.0)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _naive(datetime.fromisoformat(text))
        except ValueError:
            return None

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
            if not isinstance(nanos, (int, float)):
                nanos = 0
            return _from_epoch(seconds + nanos / 1e9)

    return None


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def to_day(value: Any) -> Optional[datetime]:
    """Like to_datetime, truncated to the start of the day."""
    parsed = to_datetime(value)
    return start_of_day(parsed) if parsed else None


def first_date(record: dict, fields: tuple[str, ...], *, day: bool = False) -> Optional[datetime]:
    """First non-empty field among `fields` that parses as a date."""
    parse = to_day if day else to_datetime
    for name in fields:
        raw = record.get(name)
        if raw in (None, ""):
            continue
        parsed = parse(raw)
        if parsed is not None:
            return parsed
    return None


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days between two datetimes (negative when end < start)."""
    return (end - start).total_seconds() / DAY_SECONDS


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max.replace(microsecond=999000))


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """First instant and last instant (…59.999) of a calendar month."""
    first = datetime(year, month, 1)
    if month == 12:
        next_first = datetime(year + 1, 1, 1)
    else:
        next_first = datetime(year, month + 1, 1)
    return first, end_of_day((next_first - timedelta(days=1)).date())
