from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import days_between
from ..common.numbers import round_half_up
from ..core.constants import NO_AREA_LABEL, TOP_AREAS_LIMIT
from ..core.enums import AccidentKind, AccidentStatus
from ..employees.model import Employee
from ..period.model import Period
from .loss import accidents_in_period
from .model import AccidentEvent


@dataclass
class AreaCount:
    area: str
    accidents: int = 0
    incidents: int = 0
    total: int = 0


@dataclass(frozen=True)
class AccidentBreakdown:
    total: int
    accidents: int
    incidents: int
    with_lost_time: int
    without_lost_time: int
    open: int
    closed: int
    incident_ratio: float
    by_area: dict[str, AreaCount] = field(default_factory=dict)
    days_without_accidents: Optional[int] = None

    def top_areas(self, n: int = TOP_AREAS_LIMIT) -> list[AreaCount]:
        ranked = sorted(self.by_area.values(), key=lambda a: (-a.total, a.area))
        return ranked[:n]

    def to_dict(self, *, top_n: int = TOP_AREAS_LIMIT) -> dict:
        return {
            "total": self.total,
            "accidents": self.accidents,
            "incidents": self.incidents,
            "with_lost_time": self.with_lost_time,
            "without_lost_time": self.without_lost_time,
            "open": self.open,
            "closed": self.closed,
            "incident_ratio": self.incident_ratio,
            "by_area": {name: asdict(count) for name, count in self.by_area.items()},
            "top_areas": [asdict(a) for a in self.top_areas(top_n)],
            "days_without_accidents": self.days_without_accidents,
        }


def incident_ratio(incidents: int, accidents: int) -> float:
    """Incidents reported per accident; more is a healthier reporting culture."""
    if accidents > 0:
        return round_half_up(incidents / accidents, 2)
    return float(incidents)


def days_without_accidents(accidents: Sequence[AccidentEvent], now: datetime) -> Optional[int]:
    dates = [a.occurred_at for a in accidents if a.is_accident and a.occurred_at and a.occurred_at <= now]
    if not dates:
        return None
    return math.floor(days_between(max(dates), now))


def analyze_accidents(
    accidents: Sequence[AccidentEvent],
    period: Period,
    now: datetime,
    *,
    employees_by_id: Optional[Mapping[str, Employee]] = None,
) -> AccidentBreakdown:
    employees_by_id = employees_by_id or {}
    in_period = accidents_in_period(accidents, period)

    accident_list = [a for a in in_period if a.kind == AccidentKind.ACCIDENT]
    incident_count = sum(1 for a in in_period if a.kind == AccidentKind.INCIDENT)
    with_lost_time = sum(1 for a in accident_list if a.has_lost_time)

    by_area: dict[str, AreaCount] = {}
    for accident in in_period:
        for involved in accident.involved:
            employee = employees_by_id.get(involved.employee_id) if involved.employee_id else None
            area = (employee.area if employee else None) or NO_AREA_LABEL
            count = by_area.setdefault(area, AreaCount(area=area))
            count.total += 1
            if accident.is_accident:
                count.accidents += 1
            else:
                count.incidents += 1

    return AccidentBreakdown(
        total=len(in_period),
        accidents=len(accident_list),
        incidents=incident_count,
        with_lost_time=with_lost_time,
        without_lost_time=len(accident_list) - with_lost_time,
        open=sum(1 for a in in_period if a.status == AccidentStatus.OPEN),
        closed=sum(1 for a in in_period if a.status == AccidentStatus.CLOSED),
        incident_ratio=incident_ratio(incident_count, len(accident_list)),
        by_area=by_area,
        days_without_accidents=days_without_accidents(accidents, now),
    )
