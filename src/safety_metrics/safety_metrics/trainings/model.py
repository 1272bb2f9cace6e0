from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.coercion import as_str_id, normalize_text
from ..common.datetime_utils import to_datetime
from ..core.enums import TrainingKind, TrainingStatus


@dataclass(frozen=True)
class TrainingSession:
    session_id: str
    kind: Optional[TrainingKind]
    status: Optional[TrainingStatus]
    held_at: Optional[datetime]
    attendee_ids: frozenset[str] = frozenset()

    def attended_by(self, employee_id: str) -> bool:
        return employee_id in self.attendee_ids

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TrainingSession":
        kind = normalize_text(record.get("tipo"))
        status = normalize_text(record.get("estado"))
        entries = record.get("empleados")
        attendees = set()
        for entry in entries if isinstance(entries, list) else []:
            if not isinstance(entry, Mapping) or entry.get("asistio") is not True:
                continue
            employee_id = as_str_id(entry.get("empleadoId"))
            if employee_id:
                attendees.add(employee_id)
        return cls(
            session_id=as_str_id(record.get("id")) or "",
            kind=TrainingKind(kind) if kind in {k.value for k in TrainingKind} else None,
            status=TrainingStatus(status) if status in {s.value for s in TrainingStatus} else None,
            held_at=to_datetime(record.get("fechaRealizada")),
            attendee_ids=frozenset(attendees),
        )
