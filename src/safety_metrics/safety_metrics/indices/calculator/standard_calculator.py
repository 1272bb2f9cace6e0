from __future__ import annotations

from .base import IndexCalculator
from ..model import IndexInputs, IndexResult, IndexSet
from ...common.numbers import safe_div
from ...core.constants import FREQUENCY_FACTOR, INCIDENCE_FACTOR


class StandardIndexCalculator(IndexCalculator):
    """Standard rule set: per-million-hours frequency/severity, per-thousand incidence.

    Every formula yields 0 on a zero denominator.
    """

    def calculate(self, inputs: IndexInputs) -> IndexSet:
        hours = inputs.hours_worked
        frequency = safe_div(inputs.lost_time_accidents * FREQUENCY_FACTOR, hours)
        severity = safe_div(inputs.days_lost * FREQUENCY_FACTOR, hours)
        lost = inputs.hours_lost_total

        return IndexSet(
            absenteeism=IndexResult(
                key="absenteeism",
                technical_value=safe_div(lost, hours + lost) * 100,
                unit="%",
                description="Horas perdidas sobre horas programadas",
            ),
            frequency=IndexResult(
                key="frequency",
                technical_value=frequency,
                unit="acc/MMhh",
                description="Accidentes con baja por millón de horas trabajadas",
            ),
            severity=IndexResult(
                key="severity",
                technical_value=severity,
                unit="días/MMhh",
                description="Días perdidos por millón de horas trabajadas",
            ),
            incidence=IndexResult(
                key="incidence",
                technical_value=safe_div(
                    inputs.accidented_employees * INCIDENCE_FACTOR, inputs.exposed_workforce
                ),
                unit="acc/1000 trab",
                description="Trabajadores accidentados por cada mil expuestos",
            ),
            accidentability=IndexResult(
                key="accidentability",
                technical_value=frequency + severity,
                unit="índice",
                description="Frecuencia más gravedad",
            ),
        )
