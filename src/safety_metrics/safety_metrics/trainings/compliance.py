from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import days_between
from ..common.numbers import round_half_up, safe_div
from ..core.constants import TRAINING_EXPIRY_DAYS
from ..core.enums import TrainingKind, TrainingStatus
from ..employees.model import Employee
from ..period.model import Period
from .model import TrainingSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainingCompliance:
    total_sessions: int
    completed: int
    active: int
    by_kind: dict[str, int] = field(default_factory=dict)
    trained_employees: int = 0
    total_employees: int = 0
    compliance_pct: float = 0.0
    expired_employees: int = 0
    untrained_employees: int = 0

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "completed": self.completed,
            "active": self.active,
            "by_kind": dict(self.by_kind),
            "trained_employees": self.trained_employees,
            "total_employees": self.total_employees,
            "compliance_pct": self.compliance_pct,
            "expired_employees": self.expired_employees,
            "untrained_employees": self.untrained_employees,
        }


def _is_expired(
    employee: Employee,
    sessions: Sequence[TrainingSession],
    now: datetime,
    expiry_days: int,
) -> bool:
    dates = [s.held_at for s in sessions if s.held_at and s.attended_by(employee.employee_id)]
    if not dates:
        return True
    return math.floor(days_between(max(dates), now)) > expiry_days


def compute_training_compliance(
    sessions: Sequence[TrainingSession],
    employees: Sequence[Employee],
    period: Period,
    now: datetime,
    *,
    expiry_days: int = TRAINING_EXPIRY_DAYS,
) -> TrainingCompliance:
    """Training coverage of the roster for the window.

    An employee is expired when they attended nothing in the window, or their
    latest attended session is older than `expiry_days`.
    """
    in_period = [s for s in sessions if period.contains(s.held_at)]

    attendees: set[str] = set()
    for session in in_period:
        attendees |= session.attendee_ids

    total_employees = len(employees)
    trained = len(attendees)
    expired = sum(1 for e in employees if _is_expired(e, in_period, now, expiry_days))

    logger.debug("trainings: %d sessions in window, %d attendees", len(in_period), trained)
    return TrainingCompliance(
        total_sessions=len(in_period),
        completed=sum(1 for s in in_period if s.status == TrainingStatus.COMPLETED),
        active=sum(1 for s in in_period if s.status == TrainingStatus.ACTIVE),
        by_kind={kind.value: sum(1 for s in in_period if s.kind == kind) for kind in TrainingKind},
        trained_employees=trained,
        total_employees=total_employees,
        compliance_pct=round_half_up(safe_div(trained, total_employees) * 100, 2),
        expired_employees=expired,
        untrained_employees=max(0, total_employees - trained),
    )
