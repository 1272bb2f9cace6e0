from datetime import datetime

from src.safety_metrics.safety_metrics.accidents.loss import compute_accident_loss, involved_days_lost
from src.safety_metrics.safety_metrics.accidents.model import AccidentEvent, InvolvedEmployee
from src.safety_metrics.safety_metrics.employees.model import Branch, Employee
from src.safety_metrics.safety_metrics.period.resolver import resolve_period

NOW = datetime(2025, 6, 15, 10, 0)
PERIOD_2024 = resolve_period(2024, NOW)

RECORDS = [
    {"id": "a1", "tipo": "accidente", "fechaHora": "2024-03-10T08:00:00", "sucursalId": "s1",
     "empleadosInvolucrados": [
         {"empleadoId": "e1", "conReposo": True, "diasPerdidos": 4},
         {"empleadoId": "e2", "conReposo": False},
     ]},
    {"id": "a2", "tipo": "accidente", "fechaHora": "2024-12-20T10:00:00", "sucursalId": "s1",
     "empleadosInvolucrados": [
         {"empleadoId": "e3", "conReposo": True, "fechaInicioReposo": "2024-12-20T10:00:00"},
     ]},
    {"id": "a3", "tipo": "incidente", "fechaHora": "2024-05-01T08:00:00",
     "empleadosInvolucrados": [{"empleadoId": "e2", "conReposo": True, "diasPerdidos": 2}]},
    {"id": "a4", "tipo": "accidente", "fechaHora": "2023-05-01T08:00:00",
     "empleadosInvolucrados": [{"empleadoId": "e1", "conReposo": True, "diasPerdidos": 9}]},
    {"id": "a5", "tipo": "accidente", "fechaHora": "sin fecha",
     "empleadosInvolucrados": [{"empleadoId": "e1", "conReposo": True, "diasPerdidos": 9}]},
]

EMPLOYEES = {
    "e1": Employee(employee_id="e1", name="Ana", status=None, role=None, registered_at=None,
                   weekly_hours=40, working_days=5),
}
BRANCHES = {"s1": Branch(branch_id="s1", weekly_hours=36, working_days=4)}


def test_event_from_record():
    event = AccidentEvent.from_record(RECORDS[0])
    assert event.is_accident
    assert event.has_lost_time
    assert event.occurred_at == datetime(2024, 3, 10, 8, 0)
    assert [i.employee_id for i in event.involved] == ["e1", "e2"]
    assert event.involved[0].days_lost == 4
    assert event.involved[1].days_lost is None


def test_loss_for_period():
    accidents = [AccidentEvent.from_record(r) for r in RECORDS]
    loss = compute_accident_loss(
        accidents, PERIOD_2024, NOW, employees_by_id=EMPLOYEES, branches_by_id=BRANCHES
    )

    assert loss.accidents_in_period == 3
    assert loss.lost_time_accidents == 2
    # 4 recorded + ceil(11.58) computed up to the period end
    assert loss.days_lost == 16
    # e1 at 8h/day, e3 unknown so the accident branch applies (9h/day)
    assert loss.hours_lost == 4 * 8 + 12 * 9
    assert loss.accidented_employee_ids == ("e1", "e3")
    assert loss.accidented_employees == 2


def test_leave_is_clamped_to_period_start():
    accident = AccidentEvent(accident_id="x", kind=None, occurred_at=datetime(2023, 12, 28), status=None)
    involved = InvolvedEmployee(
        employee_id="e1",
        name="",
        on_leave=True,
        leave_start=datetime(2023, 12, 28),
        leave_end=datetime(2024, 1, 5),
    )
    assert involved_days_lost(involved, accident, PERIOD_2024, NOW) == 4


def test_leave_outside_period_is_zero():
    accident = AccidentEvent(accident_id="x", kind=None, occurred_at=datetime(2023, 11, 1), status=None)
    involved = InvolvedEmployee(
        employee_id="e1",
        name="",
        on_leave=True,
        leave_end=datetime(2023, 11, 10),
    )
    assert involved_days_lost(involved, accident, PERIOD_2024, NOW) == 0


def test_open_leave_runs_until_now():
    period = resolve_period(2025, NOW)
    accident = AccidentEvent(accident_id="x", kind=None, occurred_at=datetime(2025, 6, 12, 10, 0), status=None)
    involved = InvolvedEmployee(employee_id="e1", name="", on_leave=True)
    assert involved_days_lost(involved, accident, period, NOW) == 3


def test_no_accidents():
    loss = compute_accident_loss([], PERIOD_2024, NOW)
    assert loss.to_dict() == {
        "accidents_in_period": 0,
        "lost_time_accidents": 0,
        "days_lost": 0.0,
        "hours_lost": 0.0,
        "accidented_employees": 0,
    }
