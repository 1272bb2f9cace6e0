from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..accidents.breakdown import AccidentBreakdown, analyze_accidents
from ..alerts.service import Alert, build_alerts
from ..audits.service import AuditMetrics, compute_audit_metrics
from ..common.datetime_utils import now_local
from ..core.constants import TOP_AREAS_LIMIT, TRAINING_EXPIRY_DAYS
from ..data.dataset import SafetyDataset
from ..data.repository import SafetyDataRepository
from ..indices.comparator import YearComparator, YearComparison
from ..indices.service import IndexPipeline, IndexReport
from ..trainings.compliance import TrainingCompliance, compute_training_compliance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardReport:
    year: int
    month: Optional[int]
    branch_id: Optional[str]
    generated_at: datetime
    index_report: IndexReport
    accidents: AccidentBreakdown
    trainings: TrainingCompliance
    audits: AuditMetrics
    alerts: list[Alert]
    comparison: Optional[YearComparison] = None
    top_areas_limit: int = TOP_AREAS_LIMIT

    def to_dict(self) -> dict:
        report = self.index_report
        return {
            "year": self.year,
            "month": self.month,
            "branch_id": self.branch_id,
            "generated_at": self.generated_at.isoformat(),
            "period": report.period.to_dict(),
            "indices": report.indices.to_dict(),
            "metrics": report.metrics.to_dict(),
            "workforce": report.workforce.to_dict(),
            "occupational_health": report.occupational_health.to_dict(),
            "accidents": self.accidents.to_dict(top_n=self.top_areas_limit),
            "trainings": self.trainings.to_dict(),
            "audits": self.audits.to_dict(),
            "alerts": [a.to_dict() for a in self.alerts],
            "comparison": self.comparison.to_dict() if self.comparison else None,
        }


class DashboardService:
    def __init__(
        self,
        repository: SafetyDataRepository,
        *,
        pipeline: Optional[IndexPipeline] = None,
        comparator: Optional[YearComparator] = None,
        training_expiry_days: int = TRAINING_EXPIRY_DAYS,
        top_areas_limit: int = TOP_AREAS_LIMIT,
    ):
        self._repository = repository
        self._pipeline = pipeline or IndexPipeline()
        self._comparator = comparator or YearComparator(self._pipeline)
        self._training_expiry_days = training_expiry_days
        self._top_areas_limit = top_areas_limit

    def load(self, branch_id: Optional[str] = None) -> SafetyDataset:
        return SafetyDataset.from_repository(self._repository, branch_id)

    def build(
        self,
        year: int,
        month: Optional[int] = None,
        branch_id: Optional[str] = None,
        now: Optional[datetime] = None,
        compare: bool = True,
    ) -> DashboardReport:
        now = now or now_local()
        dataset = self.load(branch_id)

        index_report = self._pipeline.run(year, dataset, now, month=month)
        period = index_report.period

        accidents = analyze_accidents(
            dataset.accidents, period, now, employees_by_id=dataset.employees_by_id
        )
        trainings = compute_training_compliance(
            dataset.trainings,
            dataset.employees,
            period,
            now,
            expiry_days=self._training_expiry_days,
        )
        audits = compute_audit_metrics(dataset.audits, period)

        comparison = None
        if compare:
            comparison = self._comparator.compare(
                year,
                dataset,
                now,
                current=index_report if month is None else None,
            )

        logger.info(
            "dashboard built for %s",
            year,
            extra={"period": period.to_dict(), "branch_id": branch_id},
        )
        return DashboardReport(
            year=year,
            month=month,
            branch_id=branch_id,
            generated_at=now,
            index_report=index_report,
            accidents=accidents,
            trainings=trainings,
            audits=audits,
            alerts=build_alerts(accidents, trainings),
            comparison=comparison,
            top_areas_limit=self._top_areas_limit,
        )

    def compare_years(
        self,
        year: int,
        branch_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> YearComparison:
        return self._comparator.compare(year, self.load(branch_id), now or now_local())
