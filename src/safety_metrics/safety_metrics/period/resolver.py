from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, datetime
from typing import Optional

from ..common.datetime_utils import end_of_day, month_bounds
from .model import Period


def resolve_period(year: int, now: datetime, month: Optional[int] = None) -> Period:
    """Analysis window for a year (or one month of it), clamped to `now`.

    The current year/month ends at `now`; past ones end at their last instant
    (…23:59:59.999). No range validation: years outside what `datetime` can
    represent are pinned to its limits so a window is always returned.
    """
    year = min(max(int(year), MINYEAR), MAXYEAR - 1)

    if month is not None:
        month = min(max(int(month), 1), 12)
        start, last_instant = month_bounds(year, month)
        if now.year == year and now.month == month:
            return Period(start=start, end=now)
        return Period(start=start, end=last_instant)

    start = datetime(year, 1, 1)
    if year == now.year:
        return Period(start=start, end=now)
    return Period(start=start, end=end_of_day(datetime(year, 12, 31).date()))


def historical_period(now: datetime) -> Period:
    return Period(start=None, end=now)
