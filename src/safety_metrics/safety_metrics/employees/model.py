from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.coercion import as_str_id, normalize_text, positive_number
from ..common.datetime_utils import first_date, to_datetime
from ..core.constants import DEFAULT_WEEKLY_HOURS, DEFAULT_WORKING_DAYS
from ..core.enums import EmployeeRole, EmployeeStatus

REGISTRATION_FIELDS = ("createdAt", "fechaAlta")


@dataclass(frozen=True)
class Branch:
    """Sucursal: jornada por defecto para empleados sin valores propios."""

    branch_id: str
    name: str = ""
    weekly_hours: Optional[float] = None
    working_days: Optional[float] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Branch":
        return cls(
            branch_id=as_str_id(record.get("id")) or "",
            name=str(record.get("nombre") or ""),
            weekly_hours=positive_number(record.get("horasSemanales")),
            working_days=positive_number(record.get("diasLaborales")),
        )


@dataclass(frozen=True)
class Employee:
    """Empleado de la nómina, inmutable durante una pasada de cálculo."""

    employee_id: str
    name: str
    status: Optional[EmployeeStatus]
    role: Optional[EmployeeRole]
    registered_at: Optional[datetime]
    branch_id: Optional[str] = None
    area: Optional[str] = None
    weekly_hours: Optional[float] = None
    working_days: Optional[float] = None
    leave_started_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    @property
    def is_on_leave(self) -> bool:
        return self.status == EmployeeStatus.INACTIVE and self.leave_started_at is not None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Employee":
        status_raw = normalize_text(record.get("estado"))
        role_raw = normalize_text(record.get("tipo"))
        return cls(
            employee_id=as_str_id(record.get("id")) or "",
            name=str(record.get("nombre") or record.get("displayName") or ""),
            status=EmployeeStatus(status_raw) if status_raw in {s.value for s in EmployeeStatus} else None,
            role=EmployeeRole(role_raw) if role_raw in {r.value for r in EmployeeRole} else None,
            registered_at=first_date(record, REGISTRATION_FIELDS),
            branch_id=as_str_id(record.get("sucursalId")),
            area=(str(record["area"]).strip() or None) if record.get("area") else None,
            weekly_hours=positive_number(record.get("horasSemanales")),
            working_days=positive_number(record.get("diasLaborales")),
            leave_started_at=to_datetime(record.get("fechaInicioReposo")),
        )


def employee_schedule(employee: Optional[Employee], branch: Optional[Branch]) -> tuple[float, float]:
    """(weekly hours, working days): own value, else branch, else 40h/5d."""
    weekly = (employee.weekly_hours if employee else None) or (branch.weekly_hours if branch else None)
    days = (employee.working_days if employee else None) or (branch.working_days if branch else None)
    return weekly or DEFAULT_WEEKLY_HOURS, days or DEFAULT_WORKING_DAYS


def employee_hours_per_day(employee: Optional[Employee], branch: Optional[Branch]) -> float:
    weekly, days = employee_schedule(employee, branch)
    return weekly / days
