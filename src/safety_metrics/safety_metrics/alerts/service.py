from __future__ import annotations

from dataclasses import dataclass

from ..accidents.breakdown import AccidentBreakdown
from ..common.numbers import round_half_up, safe_div
from ..core.enums import AlertSeverity
from ..trainings.compliance import TrainingCompliance

OPEN_ACCIDENTS_ERROR_ABOVE = 5
EXPIRED_TRAININGS_WARNING_ABOVE = 10
OPEN_RATE_ERROR_ABOVE_PCT = 50
COMPLIANCE_WARNING_BELOW = 60
COMPLIANCE_ERROR_BELOW = 40
INCIDENT_RATIO_INFO_BELOW = 2

_SEVERITY_ORDER = {AlertSeverity.ERROR: 0, AlertSeverity.WARNING: 1, AlertSeverity.INFO: 2}


@dataclass(frozen=True)
class Alert:
    code: str
    severity: AlertSeverity
    title: str
    description: str

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
        }


def build_alerts(accidents: AccidentBreakdown, trainings: TrainingCompliance) -> list[Alert]:
    """Dashboard alerts, most severe first (stable within a severity)."""
    alerts: list[Alert] = []

    if accidents.open > 0:
        alerts.append(
            Alert(
                code="open_accidents",
                severity=AlertSeverity.ERROR if accidents.open > OPEN_ACCIDENTS_ERROR_ABOVE else AlertSeverity.WARNING,
                title=f"{accidents.open} accidente(s) abierto(s)",
                description="Requieren atención y cierre. Revisa los casos pendientes.",
            )
        )

    if trainings.expired_employees > 0:
        alerts.append(
            Alert(
                code="expired_trainings",
                severity=(
                    AlertSeverity.WARNING
                    if trainings.expired_employees > EXPIRED_TRAININGS_WARNING_ABOVE
                    else AlertSeverity.INFO
                ),
                title=f"{trainings.expired_employees} empleado(s) con capacitaciones vencidas",
                description="Más de 365 días sin renovar. Actualiza las capacitaciones.",
            )
        )

    open_pct = safe_div(accidents.open, accidents.total) * 100
    if open_pct > OPEN_RATE_ERROR_ABOVE_PCT:
        alerts.append(
            Alert(
                code="high_open_rate",
                severity=AlertSeverity.ERROR,
                title="Alta tasa de casos abiertos",
                description=f"El {round_half_up(open_pct, 0):.0f}% de los casos están abiertos. Prioriza el cierre.",
            )
        )

    if trainings.compliance_pct < COMPLIANCE_WARNING_BELOW:
        alerts.append(
            Alert(
                code="low_training_compliance",
                severity=(
                    AlertSeverity.ERROR
                    if trainings.compliance_pct < COMPLIANCE_ERROR_BELOW
                    else AlertSeverity.WARNING
                ),
                title="Bajo cumplimiento de capacitaciones",
                description=f"Solo el {trainings.compliance_pct:.1f}% de empleados están capacitados.",
            )
        )

    if accidents.incident_ratio < INCIDENT_RATIO_INFO_BELOW:
        alerts.append(
            Alert(
                code="low_incident_reporting",
                severity=AlertSeverity.INFO,
                title="Mejorar cultura de reporte",
                description=(
                    f"Ratio incidentes/accidentes: {accidents.incident_ratio:.1f}:1. "
                    "Se recomienda fomentar el reporte de incidentes."
                ),
            )
        )

    alerts.sort(key=lambda a: _SEVERITY_ORDER[a.severity])
    return alerts
