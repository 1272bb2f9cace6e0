from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from ..absences.aggregator import aggregate_occupational_health
from ..absences.hours import HoursPerDayResolver
from ..absences.model import OccupationalHealthReport
from ..accidents.loss import AccidentLoss, compute_accident_loss
from ..core.constants import DEFAULT_HOURS_PER_DAY, RECENT_CASES_LIMIT
from ..data.dataset import SafetyDataset
from ..employees.workforce import WorkforceReport, compute_workforce
from ..period.model import Period
from ..period.resolver import resolve_period
from .calculator.base import IndexCalculator
from .calculator.standard_calculator import StandardIndexCalculator
from .model import IndexInputs, IndexSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexMetrics:
    gross_hours_worked: float
    hours_worked: float
    hours_lost_accidents: float
    hours_lost_absences: float
    hours_lost_total: float
    days_lost_accidents: float
    days_lost_absences: float
    days_lost_total: float
    lost_time_accidents: int
    accidented_employees: int
    exposed_workforce: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class IndexReport:
    year: int
    month: Optional[int]
    period: Period
    indices: IndexSet
    metrics: IndexMetrics
    workforce: WorkforceReport
    accident_loss: AccidentLoss
    occupational_health: OccupationalHealthReport

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "period": self.period.to_dict(),
            "indices": self.indices.to_dict(),
            "metrics": self.metrics.to_dict(),
            "workforce": self.workforce.to_dict(),
            "accident_loss": self.accident_loss.to_dict(),
            "occupational_health": self.occupational_health.to_dict(),
        }


class IndexPipeline:
    """Window -> absences -> workforce -> accident loss -> indices.

    Absence losses that are accident-linked are left out so accident days and
    hours are only counted once (from the accident records).
    """

    def __init__(
        self,
        *,
        calculator: Optional[IndexCalculator] = None,
        default_hours_per_day: float = DEFAULT_HOURS_PER_DAY,
        recent_cases_limit: int = RECENT_CASES_LIMIT,
    ):
        self._calculator = calculator or StandardIndexCalculator()
        self._default_hours_per_day = default_hours_per_day
        self._recent_cases_limit = recent_cases_limit

    def run(
        self,
        year: int,
        dataset: SafetyDataset,
        now: datetime,
        *,
        month: Optional[int] = None,
    ) -> IndexReport:
        period = resolve_period(year, now, month)
        hours_resolver = HoursPerDayResolver(
            dataset.employees_by_id,
            dataset.branches_by_id,
            default=self._default_hours_per_day,
        )

        health = aggregate_occupational_health(
            dataset.absences,
            period,
            now,
            resolve_hours_per_day=hours_resolver,
            resolve_employee=hours_resolver.resolve_employee,
            recent_limit=self._recent_cases_limit,
        )
        workforce = compute_workforce(dataset.employees, period, branches_by_id=dataset.branches_by_id)
        loss = compute_accident_loss(
            dataset.accidents,
            period,
            now,
            employees_by_id=dataset.employees_by_id,
            branches_by_id=dataset.branches_by_id,
        )

        hours_lost_total = loss.hours_lost + health.summary.hours_lost_non_accident
        days_lost_total = loss.days_lost + health.summary.days_lost_non_accident
        net_hours = max(0.0, workforce.gross_hours_worked - hours_lost_total)

        metrics = IndexMetrics(
            gross_hours_worked=workforce.gross_hours_worked,
            hours_worked=net_hours,
            hours_lost_accidents=loss.hours_lost,
            hours_lost_absences=health.summary.hours_lost_non_accident,
            hours_lost_total=hours_lost_total,
            days_lost_accidents=loss.days_lost,
            days_lost_absences=health.summary.days_lost_non_accident,
            days_lost_total=days_lost_total,
            lost_time_accidents=loss.lost_time_accidents,
            accidented_employees=loss.accidented_employees,
            exposed_workforce=workforce.average_exposed_workforce,
        )
        indices = self._calculator.calculate(
            IndexInputs(
                hours_worked=net_hours,
                lost_time_accidents=loss.lost_time_accidents,
                days_lost=days_lost_total,
                hours_lost_total=hours_lost_total,
                exposed_workforce=workforce.average_exposed_workforce,
                accidented_employees=loss.accidented_employees,
            )
        )

        logger.info(
            "indices computed for %s%s",
            year,
            f"-{month:02d}" if month else "",
            extra={"period": period.to_dict()},
        )
        return IndexReport(
            year=year,
            month=month,
            period=period,
            indices=indices,
            metrics=metrics,
            workforce=workforce,
            accident_loss=loss,
            occupational_health=health,
        )
