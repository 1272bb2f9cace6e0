from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..common.coercion import as_str_id, first_text, normalize_text
from ..common.datetime_utils import first_date
from ..core.constants import OTHER_ABSENCE_LABEL
from ..core.enums import CaseType
from .hours import case_employee_id

START_FIELDS = ("fechaInicio", "inicio", "fecha", "startDate")
END_FIELDS = ("fechaFin", "fin", "fechaCierre", "endDate")
CLOSED_STATUSES = frozenset({"cerrado", "cerrada", "finalizado", "finalizada", "resuelto"})
ACCIDENT_KEYWORD = "accident"


@dataclass(frozen=True)
class CaseTypeResolution:
    case_type: CaseType
    label: str


@dataclass(frozen=True)
class NormalizedCase:
    case_id: Optional[str]
    employee_id: Optional[str]
    case_type: CaseType
    label: str
    status: str
    is_open: bool
    accident_linked: bool
    start: Optional[datetime]
    end: Optional[datetime]


@dataclass(frozen=True)
class _Tokens:
    tipo: str
    motivo: str
    descripcion: str

    def includes(self, needle: str) -> bool:
        return any(needle in token for token in (self.tipo, self.motivo, self.descripcion) if token)


def _tokens(raw: Mapping[str, Any]) -> _Tokens:
    return _Tokens(
        tipo=first_text(raw, "tipo", "categoria", "clasificacion"),
        motivo=first_text(raw, "motivo", "razon"),
        descripcion=normalize_text(raw.get("descripcionCorta")),
    )


# Ordered: the first matching rule decides the type.
TYPE_RULES: tuple[tuple[CaseType, str, Callable[[_Tokens], bool]], ...] = (
    (CaseType.COVID, "Casos covid positivos", lambda t: t.includes("covid")),
    (CaseType.OCCUPATIONAL, "Enfermedades ocupacionales", lambda t: t.includes("ocupac")),
    (CaseType.ACCIDENT, "Reposo por accidente", lambda t: t.includes(ACCIDENT_KEYWORD)),
    (CaseType.SPECIAL_LEAVE, "Licencias especiales", lambda t: t.includes("licencia") or t.includes("permiso")),
    (
        CaseType.ILLNESS,
        "Enfermedades comunes",
        lambda t: t.includes("enfermedad") or t.tipo in ("medica", "salud"),
    ),
)


def resolve_case_type(raw: Mapping[str, Any]) -> CaseTypeResolution:
    tokens = _tokens(raw)
    for case_type, label, matches in TYPE_RULES:
        if matches(tokens):
            return CaseTypeResolution(case_type, label)

    label = raw.get("etiqueta") or raw.get("tipo") or raw.get("categoria")
    return CaseTypeResolution(CaseType.OTHER, str(label) if label else OTHER_ABSENCE_LABEL)


def status_text(raw: Mapping[str, Any]) -> str:
    return first_text(raw, "estado", "status")


def resolve_is_open(raw: Mapping[str, Any], end: Optional[datetime]) -> bool:
    status = status_text(raw)
    if not status:
        return end is None
    return status not in CLOSED_STATUSES


def resolve_accident_link(raw: Mapping[str, Any]) -> bool:
    if raw.get("accidenteId") or raw.get("accidentId") or raw.get("relacionAccidente") is True:
        return True
    return ACCIDENT_KEYWORD in normalize_text(raw.get("tipo")) or ACCIDENT_KEYWORD in normalize_text(raw.get("motivo"))


def resolve_start(raw: Mapping[str, Any]) -> Optional[datetime]:
    return first_date(raw, START_FIELDS, day=True) or first_date(raw, ("createdAt",), day=True)


def resolve_end(raw: Mapping[str, Any]) -> Optional[datetime]:
    return first_date(raw, END_FIELDS, day=True)


def normalize_case(raw: Mapping[str, Any]) -> NormalizedCase:
    """Typed view of one raw absence record. Total: never raises on bad data."""
    resolution = resolve_case_type(raw)
    end = resolve_end(raw)
    return NormalizedCase(
        case_id=as_str_id(raw.get("id") or raw.get("uid") or raw.get("documentId")),
        employee_id=case_employee_id(raw),
        case_type=resolution.case_type,
        label=resolution.label,
        status=status_text(raw) or "abierto",
        is_open=resolve_is_open(raw, end),
        accident_linked=resolve_accident_link(raw),
        start=resolve_start(raw),
        end=end,
    )
