from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.coercion import as_str_id, is_number, normalize_text
from ..common.datetime_utils import first_date, to_datetime
from ..core.enums import AccidentKind, AccidentStatus


@dataclass(frozen=True)
class InvolvedEmployee:
    employee_id: Optional[str]
    name: str
    on_leave: bool
    days_lost: Optional[float] = None
    leave_start: Optional[datetime] = None
    leave_end: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "InvolvedEmployee":
        days = record.get("diasPerdidos")
        return cls(
            employee_id=as_str_id(record.get("empleadoId")),
            name=str(record.get("empleadoNombre") or ""),
            on_leave=record.get("conReposo") is True,
            days_lost=float(days) if is_number(days) and days >= 0 else None,
            leave_start=to_datetime(record.get("fechaInicioReposo")),
            leave_end=first_date(record, ("fechaFinReposo", "fechaAltaReposo")),
        )


@dataclass(frozen=True)
class AccidentEvent:
    """Accidente o incidente con sus empleados involucrados."""

    accident_id: str
    kind: Optional[AccidentKind]
    occurred_at: Optional[datetime]
    status: Optional[AccidentStatus]
    branch_id: Optional[str] = None
    involved: tuple[InvolvedEmployee, ...] = ()

    @property
    def is_accident(self) -> bool:
        return self.kind == AccidentKind.ACCIDENT

    @property
    def has_lost_time(self) -> bool:
        return any(emp.on_leave for emp in self.involved)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AccidentEvent":
        kind = normalize_text(record.get("tipo"))
        status = normalize_text(record.get("estado"))
        involved = record.get("empleadosInvolucrados")
        return cls(
            accident_id=as_str_id(record.get("id")) or "",
            kind=AccidentKind(kind) if kind in {k.value for k in AccidentKind} else None,
            occurred_at=to_datetime(record.get("fechaHora")),
            status=AccidentStatus(status) if status in {s.value for s in AccidentStatus} else None,
            branch_id=as_str_id(record.get("sucursalId")),
            involved=tuple(
                InvolvedEmployee.from_record(item)
                for item in (involved if isinstance(involved, list) else [])
                if isinstance(item, Mapping)
            ),
        )
