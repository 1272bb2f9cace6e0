from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..accidents.model import AccidentEvent
from ..audits.model import AuditRecord
from ..employees.model import Branch, Employee
from ..trainings.model import TrainingSession
from .repository import Record, SafetyDataRepository

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class SafetyDataset:
    """Typed collections for one calculation pass plus its read-only lookups.

    Absences stay as raw records: their shape is resolved by the case
    normalizer and the injected hours-per-day chain.
    """

    employees: tuple[Employee, ...] = ()
    branches: tuple[Branch, ...] = ()
    accidents: tuple[AccidentEvent, ...] = ()
    absences: tuple[Record, ...] = ()
    trainings: tuple[TrainingSession, ...] = ()
    audits: tuple[AuditRecord, ...] = ()
    employees_by_id: Mapping[str, Employee] = field(default_factory=lambda: _EMPTY, compare=False)
    branches_by_id: Mapping[str, Branch] = field(default_factory=lambda: _EMPTY, compare=False)

    @classmethod
    def from_records(
        cls,
        *,
        employees: Iterable[Record] = (),
        branches: Iterable[Record] = (),
        accidents: Iterable[Record] = (),
        absences: Iterable[Record] = (),
        trainings: Iterable[Record] = (),
        audits: Iterable[Record] = (),
    ) -> "SafetyDataset":
        employee_list = tuple(Employee.from_record(r) for r in employees)
        branch_list = tuple(Branch.from_record(r) for r in branches)
        return cls(
            employees=employee_list,
            branches=branch_list,
            accidents=tuple(AccidentEvent.from_record(r) for r in accidents),
            absences=tuple(absences),
            trainings=tuple(TrainingSession.from_record(r) for r in trainings),
            audits=tuple(AuditRecord.from_record(r) for r in audits),
            employees_by_id=MappingProxyType({e.employee_id: e for e in employee_list if e.employee_id}),
            branches_by_id=MappingProxyType({b.branch_id: b for b in branch_list if b.branch_id}),
        )

    @classmethod
    def from_repository(cls, repo: SafetyDataRepository, branch_id: Optional[str] = None) -> "SafetyDataset":
        return cls.from_records(
            employees=repo.list_employees(branch_id),
            branches=repo.list_branches(branch_id),
            accidents=repo.list_accidents(branch_id),
            absences=repo.list_absences(branch_id),
            trainings=repo.list_trainings(branch_id),
            audits=repo.list_audits(branch_id),
        )
