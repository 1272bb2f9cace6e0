"""Hours-per-day resolution for absence cases.

Each resolver returns a value or None; the first value wins, in order:
case hours/day, case weekly hours / working days, employee schedule,
branch schedule, then the literal default.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.coercion import as_str_id, positive_number
from ..core.constants import DEFAULT_HOURS_PER_DAY, DEFAULT_WORKING_DAYS
from ..employees.model import Branch, Employee

RawCase = Mapping[str, Any]
HoursResolver = Callable[[RawCase], Optional[float]]


def _weekly_over_days(weekly: Optional[float], days: Optional[float]) -> Optional[float]:
    if weekly is None:
        return None
    return weekly / (days or DEFAULT_WORKING_DAYS)


def from_case_hours_per_day(case: RawCase) -> Optional[float]:
    return positive_number(case.get("horasPorDia"))


def from_case_weekly_hours(case: RawCase) -> Optional[float]:
    return _weekly_over_days(
        positive_number(case.get("horasSemanales")),
        positive_number(case.get("diasLaborales")),
    )


CASE_RESOLVERS: tuple[HoursResolver, ...] = (from_case_hours_per_day, from_case_weekly_hours)


def first_resolved(resolvers: Sequence[HoursResolver], case: RawCase, default: float) -> float:
    for resolver in resolvers:
        value = resolver(case)
        if value is not None:
            return value
    return default


def default_hours_per_day(case: RawCase) -> float:
    """Case-only chain; used when the caller injects no resolver."""
    return first_resolved(CASE_RESOLVERS, case, DEFAULT_HOURS_PER_DAY)


def case_employee_id(case: RawCase) -> Optional[str]:
    return as_str_id(case.get("empleadoId") or case.get("workerId"))


class HoursPerDayResolver:
    """Full chain bound to the pass's read-only employee/branch lookups.

    Instances are the `resolve_hours_per_day` / `resolve_employee`
    collaborators handed to the occupational health aggregator.
    """

    def __init__(
        self,
        employees_by_id: Optional[Mapping[str, Employee]] = None,
        branches_by_id: Optional[Mapping[str, Branch]] = None,
        *,
        default: float = DEFAULT_HOURS_PER_DAY,
    ):
        self._employees = employees_by_id or {}
        self._branches = branches_by_id or {}
        self._default = default

    @property
    def resolvers(self) -> tuple[HoursResolver, ...]:
        return CASE_RESOLVERS + (self.from_employee, self.from_branch)

    def resolve_employee(self, case: RawCase) -> Optional[Employee]:
        employee_id = case_employee_id(case)
        return self._employees.get(employee_id) if employee_id else None

    def from_employee(self, case: RawCase) -> Optional[float]:
        employee = self.resolve_employee(case)
        if employee is None:
            return None
        return _weekly_over_days(employee.weekly_hours, employee.working_days)

    def from_branch(self, case: RawCase) -> Optional[float]:
        employee = self.resolve_employee(case)
        branch_id = (employee.branch_id if employee else None) or as_str_id(case.get("sucursalId"))
        branch = self._branches.get(branch_id) if branch_id else None
        if branch is None:
            return None
        return _weekly_over_days(branch.weekly_hours, branch.working_days)

    def __call__(self, case: RawCase) -> float:
        return first_resolved(self.resolvers, case, self._default)
