from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.coercion import as_str_id, is_number, normalize_text
from ..common.datetime_utils import to_datetime

NONCONFORMITY_KEY = "No conforme"
CLASSIFICATION_FIELDS = ("clasificaciones", "clasificacion")


@dataclass(frozen=True)
class AuditRecord:
    """Auditoría con sus clasificaciones en bruto (forma variable)."""

    audit_id: str
    status: str
    created_at: Optional[datetime]
    branch_id: Optional[str] = None
    nonconformities: float = 0
    classifications: tuple[Any, ...] = ()
    classification_summary: Any = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AuditRecord":
        stats = record.get("estadisticas")
        counts = stats.get("conteo") if isinstance(stats, Mapping) else None
        nonconformities = counts.get(NONCONFORMITY_KEY) if isinstance(counts, Mapping) else None
        return cls(
            audit_id=as_str_id(record.get("id")) or "",
            status=normalize_text(record.get("estado")),
            created_at=to_datetime(record.get("fechaCreacion")),
            branch_id=as_str_id(record.get("sucursalId")),
            nonconformities=nonconformities if is_number(nonconformities) else 0,
            classifications=tuple(
                record[name] for name in CLASSIFICATION_FIELDS if record.get(name) is not None
            ),
            classification_summary=record.get("resumenClasificaciones"),
        )
