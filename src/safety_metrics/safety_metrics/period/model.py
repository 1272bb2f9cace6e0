from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Period:
    """Ventana de análisis. `start is None` significa histórico sin límite inferior."""

    start: Optional[datetime]
    end: datetime

    def contains(self, moment: Optional[datetime]) -> bool:
        if moment is None:
            return False
        if self.start is not None and moment < self.start:
            return False
        return moment <= self.end

    def clamp(self, start: datetime, end: datetime) -> Optional[tuple[datetime, datetime]]:
        """Intersect [start, end] with the window; None when nothing is left."""
        clamped_start = start if self.start is None or start > self.start else self.start
        clamped_end = end if end < self.end else self.end
        if clamped_end < clamped_start:
            return None
        return clamped_start, clamped_end

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat(),
        }
