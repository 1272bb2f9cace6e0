from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .core.constants import (
    DEFAULT_HOURS_PER_DAY,
    RECENT_CASES_LIMIT,
    TOP_AREAS_LIMIT,
    TRAINING_EXPIRY_DAYS,
    VARIATION_THRESHOLD_PCT,
)
from .dashboard.service import DashboardService
from .data.json_repository import JsonSnapshotRepository
from .data.repository import SafetyDataRepository
from .indices.comparator import YearComparator
from .indices.service import IndexPipeline


@dataclass(frozen=True)
class Container:
    repository: SafetyDataRepository

    index_pipeline: IndexPipeline
    year_comparator: YearComparator
    dashboard_service: DashboardService


def build_container(
    *,
    data_path: Optional[str] = None,
    options: Optional[Mapping[str, Any]] = None,
    repository: Optional[SafetyDataRepository] = None,
) -> Container:
    options = options or {}
    if repository is None:
        if not data_path:
            raise ValueError("data_path is required when no repository is given")
        repository = JsonSnapshotRepository(data_path)

    index_pipeline = IndexPipeline(
        default_hours_per_day=float(options.get("DEFAULT_HOURS_PER_DAY", DEFAULT_HOURS_PER_DAY)),
        recent_cases_limit=int(options.get("RECENT_CASES_LIMIT", RECENT_CASES_LIMIT)),
    )
    year_comparator = YearComparator(
        index_pipeline,
        threshold=float(options.get("VARIATION_THRESHOLD_PCT", VARIATION_THRESHOLD_PCT)),
    )
    dashboard_service = DashboardService(
        repository,
        pipeline=index_pipeline,
        comparator=year_comparator,
        training_expiry_days=int(options.get("TRAINING_EXPIRY_DAYS", TRAINING_EXPIRY_DAYS)),
        top_areas_limit=int(options.get("TOP_AREAS_LIMIT", TOP_AREAS_LIMIT)),
    )

    return Container(
        repository=repository,
        index_pipeline=index_pipeline,
        year_comparator=year_comparator,
        dashboard_service=dashboard_service,
    )
