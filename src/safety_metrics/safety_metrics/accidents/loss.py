from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import days_between
from ..employees.model import Branch, Employee, employee_hours_per_day
from ..period.model import Period
from .model import AccidentEvent, InvolvedEmployee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccidentLoss:
    accidents_in_period: int
    lost_time_accidents: int
    days_lost: float
    hours_lost: float
    accidented_employee_ids: tuple[str, ...]

    @property
    def accidented_employees(self) -> int:
        return len(self.accidented_employee_ids)

    def to_dict(self) -> dict:
        return {
            "accidents_in_period": self.accidents_in_period,
            "lost_time_accidents": self.lost_time_accidents,
            "days_lost": self.days_lost,
            "hours_lost": self.hours_lost,
            "accidented_employees": self.accidented_employees,
        }


def accidents_in_period(accidents: Sequence[AccidentEvent], period: Period) -> list[AccidentEvent]:
    """Events whose timestamp falls in the window; undated events are dropped."""
    return [a for a in accidents if period.contains(a.occurred_at)]


def involved_days_lost(
    involved: InvolvedEmployee,
    accident: AccidentEvent,
    period: Period,
    now: datetime,
) -> float:
    """Days of leave inside the window for one involved employee.

    A recorded `days_lost` (closed case) wins; otherwise the leave span is
    clamped to the window and rounded up to whole days.
    """
    if involved.days_lost is not None:
        return involved.days_lost

    start = involved.leave_start or accident.occurred_at
    if start is None:
        return 0.0
    end = min(involved.leave_end or now, period.end)
    if period.start is not None and period.start > start:
        start = period.start
    return float(max(0, math.ceil(days_between(start, end))))


def compute_accident_loss(
    accidents: Sequence[AccidentEvent],
    period: Period,
    now: datetime,
    *,
    employees_by_id: Optional[Mapping[str, Employee]] = None,
    branches_by_id: Optional[Mapping[str, Branch]] = None,
) -> AccidentLoss:
    """Lost-time figures for the window (historical, not "as of today")."""
    employees_by_id = employees_by_id or {}
    branches_by_id = branches_by_id or {}

    in_period = accidents_in_period(accidents, period)
    lost_time = [a for a in in_period if a.is_accident and a.has_lost_time]

    days_total = 0.0
    hours_total = 0.0
    accidented: set[str] = set()
    for accident in lost_time:
        for involved in accident.involved:
            if not involved.on_leave:
                continue
            employee = employees_by_id.get(involved.employee_id) if involved.employee_id else None
            branch_id = (employee.branch_id if employee else None) or accident.branch_id
            branch = branches_by_id.get(branch_id) if branch_id else None

            days = involved_days_lost(involved, accident, period, now)
            days_total += days
            hours_total += days * employee_hours_per_day(employee, branch)
            if involved.employee_id:
                accidented.add(involved.employee_id)

    logger.debug(
        "accident loss: %d lost-time accidents, %.1f days, %.1f hours",
        len(lost_time),
        days_total,
        hours_total,
    )
    return AccidentLoss(
        accidents_in_period=len(in_period),
        lost_time_accidents=len(lost_time),
        days_lost=days_total,
        hours_lost=hours_total,
        accidented_employee_ids=tuple(sorted(accidented)),
    )
