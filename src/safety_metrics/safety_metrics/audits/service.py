from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..period.model import Period
from .classification import ClassificationTally, tally_audits
from .model import AuditRecord

logger = logging.getLogger(__name__)

COMPLETED_STATUS = "completada"
PENDING_STATUSES = frozenset({"pendiente", "agendada", "en_proceso", "en progreso"})


@dataclass(frozen=True)
class AuditMetrics:
    total: int
    completed: int
    pending: int
    nonconformities: float
    classification: ClassificationTally

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "nonconformities": self.nonconformities,
            "classification": self.classification.to_dict(),
        }


def audits_in_period(audits: Sequence[AuditRecord], period: Period) -> list[AuditRecord]:
    """Undated audits are kept; dated ones must fall in the window."""
    return [a for a in audits if a.created_at is None or period.contains(a.created_at)]


def compute_audit_metrics(audits: Sequence[AuditRecord], period: Period) -> AuditMetrics:
    selected = audits_in_period(audits, period)
    metrics = AuditMetrics(
        total=len(selected),
        completed=sum(1 for a in selected if a.status == COMPLETED_STATUS),
        pending=sum(1 for a in selected if a.status in PENDING_STATUSES),
        nonconformities=sum(a.nonconformities for a in selected),
        classification=tally_audits(selected),
    )
    logger.debug("audits: %d in window, %s nonconformities", metrics.total, metrics.nonconformities)
    return metrics
