from datetime import datetime

from src.safety_metrics.safety_metrics.absences.normalizer import normalize_case, resolve_case_type
from src.safety_metrics.safety_metrics.core.enums import CaseType


def test_accident_keyword_wins_over_special_leave():
    case = normalize_case({"tipo": "Licencia por accidente laboral", "fechaInicio": "2024-01-02"})
    assert case.case_type == CaseType.ACCIDENT
    assert case.accident_linked is True


def test_covid_has_highest_priority():
    assert resolve_case_type({"tipo": "Enfermedad ocupacional", "motivo": "COVID-19"}).case_type == CaseType.COVID


def test_occupational_before_accident():
    assert resolve_case_type({"tipo": "Ocupacional", "motivo": "accidente"}).case_type == CaseType.OCCUPATIONAL


def test_special_leave_and_permission():
    assert resolve_case_type({"tipo": "Licencia"}).case_type == CaseType.SPECIAL_LEAVE
    assert resolve_case_type({"motivo": "Permiso gremial"}).case_type == CaseType.SPECIAL_LEAVE


def test_illness_from_keyword_or_medical_type():
    assert resolve_case_type({"descripcionCorta": "Enfermedad respiratoria"}).case_type == CaseType.ILLNESS
    assert resolve_case_type({"tipo": "medica"}).case_type == CaseType.ILLNESS
    assert resolve_case_type({"categoria": "Salud"}).case_type == CaseType.ILLNESS


def test_unknown_type_keeps_raw_label():
    resolution = resolve_case_type({"tipo": "Vacaciones"})
    assert resolution.case_type == CaseType.OTHER
    assert resolution.label == "Vacaciones"


def test_missing_type_uses_generic_label():
    resolution = resolve_case_type({})
    assert resolution.case_type == CaseType.OTHER
    assert resolution.label == "Ausencias registradas"


def test_explicit_status_decides_open_flag():
    assert normalize_case({"estado": "Cerrada", "fechaInicio": "2024-01-01"}).is_open is False
    assert normalize_case({"estado": "resuelto"}).is_open is False
    # explicit open status wins even when an end date exists
    assert normalize_case({"estado": "en curso", "fechaFin": "2024-01-05"}).is_open is True


def test_missing_status_open_iff_no_end():
    assert normalize_case({"fechaInicio": "2024-01-01"}).is_open is True
    assert normalize_case({"fechaInicio": "2024-01-01", "fechaFin": "2024-01-03"}).is_open is False


def test_accident_link_from_reference_fields():
    assert normalize_case({"tipo": "Enfermedad", "accidenteId": "a1"}).accident_linked is True
    assert normalize_case({"accidentId": "a1"}).accident_linked is True
    assert normalize_case({"relacionAccidente": True}).accident_linked is True
    assert normalize_case({"relacionAccidente": "true"}).accident_linked is False
    assert normalize_case({"tipo": "Enfermedad"}).accident_linked is False


def test_dates_truncated_to_day_with_created_at_fallback():
    case = normalize_case({"fechaInicio": "2024-03-10T15:20:00Z", "fechaFin": "2024-03-12T08:00:00"})
    assert case.start.hour == 0 and case.start.minute == 0
    assert case.end == datetime(2024, 3, 12)

    fallback = normalize_case({"createdAt": "2024-04-01T09:00:00"})
    assert fallback.start == datetime(2024, 4, 1)


def test_store_timestamp_and_bad_dates():
    seconds = 1_704_067_200
    case = normalize_case({"fechaInicio": {"seconds": seconds, "nanoseconds": 0}})
    expected = datetime.fromtimestamp(seconds)
    assert case.start == datetime(expected.year, expected.month, expected.day)

    assert normalize_case({"fechaInicio": "no es fecha"}).start is None


def test_ids_and_status_defaults():
    case = normalize_case({"uid": 17, "workerId": "w9"})
    assert case.case_id == "17"
    assert case.employee_id == "w9"
    assert case.status == "abierto"
