from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from ..common.numbers import round_half_up
from ..core.constants import DISPLAY_DIVISOR


@dataclass(frozen=True)
class IndexInputs:
    """Aggregates an index pass needs; all hours/days already prorated to the window."""

    hours_worked: float
    lost_time_accidents: int
    days_lost: float
    hours_lost_total: float
    exposed_workforce: float
    accidented_employees: int


@dataclass(frozen=True)
class IndexResult:
    key: str
    technical_value: float
    unit: str
    description: str

    @property
    def value(self) -> float:
        return round_half_up(self.technical_value, 2)

    @property
    def display_value(self) -> float:
        return round_half_up(self.technical_value / DISPLAY_DIVISOR, 1)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "value": self.value,
            "technical_value": self.technical_value,
            "display_value": self.display_value,
            "unit": self.unit,
            "description": self.description,
        }


@dataclass(frozen=True)
class IndexSet:
    absenteeism: IndexResult
    frequency: IndexResult
    severity: IndexResult
    incidence: IndexResult
    accidentability: IndexResult

    def __iter__(self) -> Iterator[IndexResult]:
        yield self.absenteeism
        yield self.frequency
        yield self.severity
        yield self.incidence
        yield self.accidentability

    def get(self, key: str) -> IndexResult:
        return getattr(self, key)

    def to_dict(self) -> dict:
        return {result.key: result.to_dict() for result in self}
