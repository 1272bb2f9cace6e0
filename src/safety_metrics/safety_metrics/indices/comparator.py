from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.numbers import round_half_up
from ..core.constants import VARIATION_THRESHOLD_PCT
from ..core.enums import VariationKind
from ..data.dataset import SafetyDataset
from .service import IndexPipeline, IndexReport

COMPARED_INDICES = ("absenteeism", "frequency", "incidence", "severity")


@dataclass(frozen=True)
class Variation:
    value: float
    kind: VariationKind

    def to_dict(self) -> dict:
        return {"valor": self.value, "tipo": self.kind.value}


def compute_variation(
    current: float,
    previous: Optional[float],
    threshold: float = VARIATION_THRESHOLD_PCT,
) -> Variation:
    """Signed % change vs the previous value.

    For safety indices lower is better, so a drop beyond the threshold is an
    improvement. Without a previous value the index is either new or unchanged.
    """
    if not previous:
        if current:
            return Variation(100.0, VariationKind.NEW)
        return Variation(0.0, VariationKind.NO_CHANGE)

    change = round_half_up((current - previous) / previous * 100, 2)
    if change < -threshold:
        kind = VariationKind.IMPROVEMENT
    elif change > threshold:
        kind = VariationKind.WORSENING
    else:
        kind = VariationKind.NO_CHANGE
    return Variation(change, kind)


@dataclass(frozen=True)
class IndexComparison:
    key: str
    current: float
    previous: float
    variation: Variation

    def to_dict(self) -> dict:
        return {
            "current": self.current,
            "previous": self.previous,
            "variation": self.variation.to_dict(),
        }


@dataclass(frozen=True)
class YearComparison:
    year: int
    previous_year: int
    current: IndexReport
    previous: IndexReport
    comparisons: dict[str, IndexComparison]

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "previous_year": self.previous_year,
            "indices": {key: c.to_dict() for key, c in self.comparisons.items()},
        }


class YearComparator:
    def __init__(self, pipeline: IndexPipeline, *, threshold: float = VARIATION_THRESHOLD_PCT):
        self._pipeline = pipeline
        self._threshold = threshold

    def compare(
        self,
        year: int,
        dataset: SafetyDataset,
        now: datetime,
        *,
        current: Optional[IndexReport] = None,
    ) -> YearComparison:
        """Run the pipeline for `year` and `year - 1` over the same dataset.

        `current` may be passed when the caller already ran the current year.
        """
        current = current or self._pipeline.run(year, dataset, now)
        previous = self._pipeline.run(year - 1, dataset, now)

        comparisons = {}
        for key in COMPARED_INDICES:
            now_value = current.indices.get(key).value
            before = previous.indices.get(key).value
            comparisons[key] = IndexComparison(
                key=key,
                current=now_value,
                previous=before,
                variation=compute_variation(now_value, before, self._threshold),
            )
        return YearComparison(
            year=year,
            previous_year=year - 1,
            current=current,
            previous=previous,
            comparisons=comparisons,
        )
