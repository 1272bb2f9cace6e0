from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import days_between, month_bounds
from ..core.constants import DEFAULT_WORKING_DAYS
from ..period.model import Period
from .model import Branch, Employee, employee_hours_per_day

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkforceReport:
    total_employees: int
    active_employees: int
    on_leave_employees: int
    working_days_in_period: int
    gross_hours_worked: float
    average_exposed_workforce: float

    def to_dict(self) -> dict:
        return asdict(self)


def working_days(start: datetime, end: datetime) -> int:
    """5-day-week approximation: floor(calendar days / 7) * 5."""
    calendar_days = max(0, math.ceil(days_between(start, end)))
    return (calendar_days // 7) * DEFAULT_WORKING_DAYS


def _employee_working_days(employee: Employee, period: Period, period_days: int) -> float:
    registered = employee.registered_at
    if registered is not None and registered > period.end:
        return 0.0

    if period.start is None:
        if registered is None:
            # unbounded on both ends: nothing to measure
            return 0.0
        return float(working_days(registered, period.end))

    if registered is None or registered <= period.start:
        return float(period_days)

    span = days_between(period.start, period.end)
    if span <= 0:
        return 0.0
    share = days_between(registered, period.end) / span
    return period_days * max(0.0, min(1.0, share))


def gross_hours_worked(
    employees: Sequence[Employee],
    period: Period,
    branches_by_id: Mapping[str, Branch],
) -> float:
    """Hours worked by the roster in the period, before lost-time deductions.

    Counts active employees and employees on leave (their leave is deducted
    later from accident and absence losses). The registration date is the
    "exists since" signal: nobody contributes hours before being registered.
    """
    period_days = working_days(period.start, period.end) if period.start is not None else 0
    total = 0.0
    for employee in employees:
        if not (employee.is_active or employee.is_on_leave):
            continue
        days = _employee_working_days(employee, period, period_days)
        if days <= 0:
            continue
        branch = branches_by_id.get(employee.branch_id) if employee.branch_id else None
        total += days * employee_hours_per_day(employee, branch)
    return total


def _months_touching(period: Period) -> list[tuple[int, int]]:
    if period.start is None or period.end < period.start:
        return []
    months = []
    year, month = period.start.year, period.start.month
    while (year, month) <= (period.end.year, period.end.month):
        months.append((year, month))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return months


def average_exposed_workforce(employees: Sequence[Employee], period: Period) -> float:
    """Monthly-averaged headcount for the incidence index."""
    months = _months_touching(period)
    if not months:
        return float(len(employees))

    counts = []
    for year, month in months:
        _, month_end = month_bounds(year, month)
        counts.append(
            sum(1 for e in employees if e.registered_at is None or e.registered_at <= month_end)
        )
    return sum(counts) / len(counts)


def compute_workforce(
    employees: Sequence[Employee],
    period: Period,
    *,
    branches_by_id: Optional[Mapping[str, Branch]] = None,
) -> WorkforceReport:
    branches_by_id = branches_by_id or {}
    report = WorkforceReport(
        total_employees=len(employees),
        active_employees=sum(1 for e in employees if e.is_active),
        on_leave_employees=sum(1 for e in employees if e.is_on_leave),
        working_days_in_period=working_days(period.start, period.end) if period.start is not None else 0,
        gross_hours_worked=gross_hours_worked(employees, period, branches_by_id),
        average_exposed_workforce=average_exposed_workforce(employees, period),
    )
    logger.debug(
        "workforce: %d employees, %.1f gross hours, %.2f exposed",
        report.total_employees,
        report.gross_hours_worked,
        report.average_exposed_workforce,
    )
    return report
