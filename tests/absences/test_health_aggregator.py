from datetime import datetime

import pytest

from src.safety_metrics.safety_metrics.absences.aggregator import aggregate_occupational_health
from src.safety_metrics.safety_metrics.core.enums import CaseType
from src.safety_metrics.safety_metrics.period.resolver import historical_period, resolve_period

NOW = datetime(2025, 6, 15, 10, 0)
PERIOD_2024 = resolve_period(2024, NOW)

CASES = [
    {"id": "c-ill", "tipo": "Enfermedad", "fechaInicio": "2024-03-01", "fechaFin": "2024-03-05", "estado": "cerrado"},
    {"id": "c-acc", "tipo": "Reposo por accidente", "fechaInicio": "2024-04-01", "fechaFin": "2024-04-02"},
    {"id": "c-cov", "tipo": "COVID", "fechaInicio": "2024-12-30"},
    {"id": "c-old", "tipo": "Enfermedad", "fechaInicio": "2023-01-01", "fechaFin": "2023-01-03"},
    {"id": "c-nodate", "tipo": "Enfermedad"},
]


def test_summary_totals_and_non_accident_subtotal():
    report = aggregate_occupational_health(CASES, PERIOD_2024, NOW)
    summary = report.summary

    assert summary.total == 3
    assert summary.open == 1
    assert summary.closed == 2
    assert summary.illness == 1
    assert summary.accident == 1
    assert summary.covid == 1
    assert summary.by_type == {"enfermedad": 1, "accidente": 1, "covid": 1}

    # ill 5 days, accident 2 days, covid 30-31 Dec = 2 days
    assert summary.days_lost_total == 9
    assert summary.hours_lost_total == 72
    assert summary.days_lost_non_accident == 7
    assert summary.hours_lost_non_accident == 56


def test_accident_hours_are_kept_out_of_non_accident_subtotal():
    report = aggregate_occupational_health(CASES, PERIOD_2024, NOW)
    accident_hours = sum(c.hours_in_period for c in report.cases if c.accident_linked)
    assert report.summary.hours_lost_total == report.summary.hours_lost_non_accident + accident_hours
    assert all(c.case_type == CaseType.ACCIDENT for c in report.cases if c.accident_linked)


def test_case_spanning_period_start_is_clamped():
    cases = [{"id": "x", "tipo": "Enfermedad", "fechaInicio": "2023-12-30", "fechaFin": "2024-01-02"}]
    report = aggregate_occupational_health(cases, PERIOD_2024, NOW)
    assert report.cases[0].days_in_period == 2


def test_fully_contained_case_is_independent_of_period_length():
    cases = [{"id": "x", "tipo": "Enfermedad", "fechaInicio": "2024-03-01", "fechaFin": "2024-03-05"}]
    year = aggregate_occupational_health(cases, PERIOD_2024, NOW)
    month = aggregate_occupational_health(cases, resolve_period(2024, NOW, month=3), NOW)
    assert year.cases[0].days_in_period == month.cases[0].days_in_period == 5


def test_open_case_runs_until_today():
    cases = [{"id": "x", "tipo": "Licencia", "fechaInicio": "2025-06-10"}]
    report = aggregate_occupational_health(cases, resolve_period(2025, NOW), NOW)
    assert report.cases[0].days_in_period == 6
    assert report.summary.special_leave == 1


def test_historical_period_has_no_lower_bound():
    cases = [{"id": "x", "tipo": "Enfermedad", "fechaInicio": "2020-01-01", "fechaFin": "2020-01-10"}]
    report = aggregate_occupational_health(cases, historical_period(NOW), NOW)
    assert report.cases[0].days_in_period == 10


def test_injected_hours_per_day_and_employee():
    cases = [{"id": "x", "empleadoId": "e1", "fechaInicio": "2024-03-01", "fechaFin": "2024-03-02"}]

    class _Employee:
        name = "Ana"

    report = aggregate_occupational_health(
        cases,
        PERIOD_2024,
        NOW,
        resolve_hours_per_day=lambda case: 6.0,
        resolve_employee=lambda case: _Employee(),
    )
    assert report.summary.hours_lost_total == 12
    assert report.cases[0].employee_name == "Ana"


def test_collaborator_errors_propagate():
    def broken(case):
        raise RuntimeError("lookup failed")

    with pytest.raises(RuntimeError):
        aggregate_occupational_health(CASES, PERIOD_2024, NOW, resolve_hours_per_day=broken)


def test_recent_cases_newest_first_with_id_tie_break():
    cases = [
        {"id": "b", "fechaInicio": "2024-05-01", "fechaFin": "2024-05-01"},
        {"id": "a", "fechaInicio": "2024-05-01", "fechaFin": "2024-05-01"},
        {"id": "c", "fechaInicio": "2024-06-01", "fechaFin": "2024-06-01"},
        {"id": "d", "fechaInicio": "2024-01-01", "fechaFin": "2024-01-01"},
    ]
    report = aggregate_occupational_health(cases, PERIOD_2024, NOW, recent_limit=3)
    assert [c.case_id for c in report.recent_cases] == ["c", "a", "b"]
    assert len(report.cases) == 4


def test_missing_id_gets_positional_fallback():
    report = aggregate_occupational_health([{"fechaInicio": "2024-05-01"}], PERIOD_2024, NOW)
    assert report.cases[0].case_id == "ausencia-0"


def test_repeated_runs_are_identical():
    first = aggregate_occupational_health(CASES, PERIOD_2024, NOW).to_dict()
    second = aggregate_occupational_health(CASES, PERIOD_2024, NOW).to_dict()
    assert first == second
