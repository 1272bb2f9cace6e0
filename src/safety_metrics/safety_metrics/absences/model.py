from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import CaseType


@dataclass(frozen=True)
class Case:
    """Caso derivado de una ausencia; vive sólo durante la pasada que lo produjo."""

    case_id: str
    employee_id: Optional[str]
    employee_name: str
    case_type: CaseType
    label: str
    status: str
    is_open: bool
    accident_linked: bool
    start: datetime
    end: Optional[datetime]
    days_in_period: int
    hours_in_period: float
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.case_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "type": self.case_type.value,
            "label": self.label,
            "status": self.status,
            "is_open": self.is_open,
            "accident_linked": self.accident_linked,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
            "days_in_period": self.days_in_period,
            "hours_in_period": self.hours_in_period,
            "notes": self.notes,
        }


@dataclass
class HealthSummary:
    total: int = 0
    open: int = 0
    closed: int = 0
    occupational: int = 0
    covid: int = 0
    illness: int = 0
    special_leave: int = 0
    accident: int = 0
    other: int = 0
    days_lost_total: int = 0
    hours_lost_total: float = 0.0
    days_lost_non_accident: int = 0
    hours_lost_non_accident: float = 0.0
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OccupationalHealthReport:
    summary: HealthSummary
    cases: list[Case]
    recent_cases: list[Case]

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "cases": [c.to_dict() for c in self.cases],
            "recent_cases": [c.to_dict() for c in self.recent_cases],
        }
