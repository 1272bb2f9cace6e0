from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import days_between, start_of_day
from ..core.constants import RECENT_CASES_LIMIT
from ..core.enums import CaseType
from ..employees.model import Employee
from ..period.model import Period
from .hours import default_hours_per_day
from .model import Case, HealthSummary, OccupationalHealthReport
from .normalizer import normalize_case

logger = logging.getLogger(__name__)

RawCase = Mapping[str, Any]

_NAMED_COUNTERS = {
    CaseType.OCCUPATIONAL: "occupational",
    CaseType.COVID: "covid",
    CaseType.ILLNESS: "illness",
    CaseType.SPECIAL_LEAVE: "special_leave",
    CaseType.ACCIDENT: "accident",
    CaseType.OTHER: "other",
}


def inclusive_days(start: datetime, end: datetime) -> int:
    diff = days_between(start, end)
    if diff < 0:
        return 0
    return math.floor(diff) + 1


def _employee_name(raw: RawCase, employee: Optional[Employee]) -> str:
    return str(
        raw.get("empleadoNombre")
        or raw.get("colaborador")
        or (employee.name if employee else "")
        or "Sin registro"
    )


def aggregate_occupational_health(
    cases: Sequence[RawCase],
    period: Period,
    now: datetime,
    *,
    resolve_hours_per_day: Optional[Callable[[RawCase], float]] = None,
    resolve_employee: Optional[Callable[[RawCase], Optional[Employee]]] = None,
    recent_limit: int = RECENT_CASES_LIMIT,
) -> OccupationalHealthReport:
    """Per-type absence totals for the window, prorated by days inside it.

    Cases with no resolvable start, or whose span does not intersect the
    window, contribute nothing. Open cases run until today. Accident-linked
    cases are kept out of the non-accident subtotal so accident loss is not
    counted twice. Exceptions raised by the injected collaborators propagate.
    """
    hours_for = resolve_hours_per_day or default_hours_per_day
    summary = HealthSummary()
    out: list[Case] = []
    today = start_of_day(now)

    for position, raw in enumerate(cases or ()):
        normalized = normalize_case(raw)
        if normalized.start is None:
            logger.debug("absence %s skipped: no start date", normalized.case_id or position)
            continue

        window = period.clamp(normalized.start, normalized.end or today)
        if window is None:
            continue

        days = inclusive_days(*window)
        if days <= 0:
            continue

        hours = max(0.0, days * hours_for(raw))
        employee = resolve_employee(raw) if resolve_employee else None

        summary.total += 1
        summary.days_lost_total += days
        summary.hours_lost_total += hours
        key = normalized.case_type.value
        summary.by_type[key] = summary.by_type.get(key, 0) + 1
        counter = _NAMED_COUNTERS[normalized.case_type]
        setattr(summary, counter, getattr(summary, counter) + 1)

        if normalized.is_open:
            summary.open += 1
        else:
            summary.closed += 1

        if not normalized.accident_linked:
            summary.days_lost_non_accident += days
            summary.hours_lost_non_accident += hours

        out.append(
            Case(
                case_id=normalized.case_id or f"ausencia-{position}",
                employee_id=normalized.employee_id,
                employee_name=_employee_name(raw, employee),
                case_type=normalized.case_type,
                label=normalized.label,
                status=normalized.status,
                is_open=normalized.is_open,
                accident_linked=normalized.accident_linked,
                start=normalized.start,
                end=normalized.end,
                days_in_period=days,
                hours_in_period=hours,
                notes=str(raw.get("observaciones") or raw.get("notas") or ""),
            )
        )

    # newest first; equal start dates fall back to case id
    out.sort(key=lambda c: c.case_id)
    out.sort(key=lambda c: c.start, reverse=True)

    logger.debug("occupational health: %d of %d cases in window", summary.total, len(cases or ()))
    return OccupationalHealthReport(summary=summary, cases=out, recent_cases=out[:recent_limit])
