from datetime import datetime

from src.safety_metrics.safety_metrics.accidents.breakdown import (
    analyze_accidents,
    days_without_accidents,
    incident_ratio,
)
from src.safety_metrics.safety_metrics.accidents.model import AccidentEvent
from src.safety_metrics.safety_metrics.employees.model import Employee
from src.safety_metrics.safety_metrics.period.resolver import resolve_period

NOW = datetime(2025, 6, 15, 10, 0)
PERIOD_2024 = resolve_period(2024, NOW)


def _event(accident_id, kind, when, status=None, involved=()):
    return AccidentEvent.from_record(
        {
            "id": accident_id,
            "tipo": kind,
            "fechaHora": when,
            "estado": status,
            "empleadosInvolucrados": [
                {"empleadoId": employee_id, "conReposo": on_leave} for employee_id, on_leave in involved
            ],
        }
    )


def _employee(employee_id, area):
    return Employee(employee_id=employee_id, name=employee_id, status=None, role=None, registered_at=None, area=area)


EMPLOYEES = {
    "e1": _employee("e1", "Producción"),
    "e2": _employee("e2", "Producción"),
    "e3": _employee("e3", "Logística"),
}

EVENTS = [
    _event("a1", "accidente", "2024-02-01T08:00:00", "abierto", [("e1", True), ("e2", False)]),
    _event("a2", "accidente", "2024-03-01T08:00:00", "cerrado", [("e9", False)]),
    _event("i1", "incidente", "2024-04-01T08:00:00", "abierto", [("e1", False)]),
    _event("i2", "incidente", "2024-05-01T08:00:00", "cerrado", [("e3", False)]),
    _event("i3", "incidente", "2024-06-01T08:00:00"),
    _event("old", "accidente", "2023-06-01T08:00:00", "abierto", [("e1", True)]),
]


def test_counts_and_splits():
    breakdown = analyze_accidents(EVENTS, PERIOD_2024, NOW, employees_by_id=EMPLOYEES)
    assert breakdown.total == 5
    assert breakdown.accidents == 2
    assert breakdown.incidents == 3
    assert breakdown.with_lost_time == 1
    assert breakdown.without_lost_time == 1
    assert breakdown.open == 2
    assert breakdown.closed == 2
    assert breakdown.incident_ratio == 1.5


def test_area_distribution_and_top_areas():
    breakdown = analyze_accidents(EVENTS, PERIOD_2024, NOW, employees_by_id=EMPLOYEES)
    production = breakdown.by_area["Producción"]
    assert (production.accidents, production.incidents, production.total) == (2, 1, 3)
    assert breakdown.by_area["Sin área"].accidents == 1
    assert [a.area for a in breakdown.top_areas(2)] == ["Producción", "Logística"]


def test_incident_ratio_rules():
    assert incident_ratio(2, 3) == 0.67
    assert incident_ratio(3, 0) == 3.0
    assert incident_ratio(0, 0) == 0.0


def test_days_without_accidents():
    events = [
        _event("a", "accidente", "2025-06-10T12:00:00"),
        _event("future", "accidente", "2025-07-01T12:00:00"),
        _event("i", "incidente", "2025-06-14T12:00:00"),
    ]
    assert days_without_accidents(events, NOW) == 4
    assert days_without_accidents(events[2:], NOW) is None


def test_to_dict_includes_top_areas():
    data = analyze_accidents(EVENTS, PERIOD_2024, NOW, employees_by_id=EMPLOYEES).to_dict(top_n=1)
    assert data["top_areas"] == [{"area": "Producción", "accidents": 2, "incidents": 1, "total": 3}]
    assert data["days_without_accidents"] is not None
