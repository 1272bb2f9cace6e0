from __future__ import annotations

import copy
from datetime import datetime

import pytest

NOW = datetime(2025, 6, 15, 10, 0, 0)

SNAPSHOT = {
    "sucursales": [
        {"id": "s1", "nombre": "Planta Norte", "horasSemanales": 45, "diasLaborales": 5},
        {"id": "s2", "nombre": "Depósito Sur"},
    ],
    "empleados": [
        {"id": "e1", "nombre": "Ana", "estado": "activo", "tipo": "operativo", "sucursalId": "s1",
         "area": "Producción", "createdAt": "2020-01-10T00:00:00", "horasSemanales": 40, "diasLaborales": 5},
        {"id": "e2", "nombre": "Bruno", "estado": "activo", "tipo": "operativo", "sucursalId": "s1",
         "area": "Producción", "createdAt": "2021-03-01T00:00:00"},
        {"id": "e3", "nombre": "Carla", "estado": "activo", "tipo": "administrativo", "sucursalId": "s2",
         "area": "Logística", "fechaAlta": "2019-05-01"},
        {"id": "e4", "nombre": "Diego", "estado": "inactivo", "sucursalId": "s2", "createdAt": "2018-01-01"},
    ],
    "accidentes": [
        {"id": "a1", "tipo": "accidente", "estado": "cerrado", "sucursalId": "s1",
         "fechaHora": "2024-03-10T08:00:00",
         "empleadosInvolucrados": [
             {"empleadoId": "e1", "conReposo": True, "diasPerdidos": 5},
             {"empleadoId": "e2", "conReposo": False},
         ]},
        {"id": "a2", "tipo": "incidente", "estado": "abierto", "sucursalId": "s2",
         "fechaHora": "2024-08-01T14:30:00",
         "empleadosInvolucrados": [{"empleadoId": "e3", "conReposo": False}]},
        {"id": "a3", "tipo": "accidente", "estado": "cerrado", "sucursalId": "s1",
         "fechaHora": "2023-02-01T09:00:00",
         "empleadosInvolucrados": [{"empleadoId": "e2", "conReposo": True, "diasPerdidos": 3}]},
    ],
    "ausencias": [
        {"id": "aus-1", "empleadoId": "e2", "sucursalId": "s1", "tipo": "Enfermedad común",
         "fechaInicio": "2024-05-06", "fechaFin": "2024-05-07", "estado": "cerrado"},
        {"id": "aus-2", "empleadoId": "e1", "sucursalId": "s1", "tipo": "Reposo por accidente",
         "accidenteId": "a1", "fechaInicio": "2024-03-10", "fechaFin": "2024-03-14", "estado": "cerrado"},
    ],
    "capacitaciones": [
        {"id": "c1", "tipo": "charla", "estado": "completada", "sucursalId": "s1",
         "fechaRealizada": "2024-02-01T10:00:00",
         "empleados": [{"empleadoId": "e1", "asistio": True}, {"empleadoId": "e2", "asistio": False}]},
        {"id": "c2", "tipo": "capacitacion", "estado": "activa", "sucursalId": "s2",
         "fechaRealizada": "2024-11-01T10:00:00",
         "empleados": [{"empleadoId": "e3", "asistio": True}]},
    ],
    "auditorias": [
        {"id": "au1", "estado": "completada", "sucursalId": "s1", "fechaCreacion": "2024-04-01T09:00:00",
         "clasificaciones": [{"condicion": True, "actitud": False}, {"valores": [{"actitud": 1}]}],
         "estadisticas": {"conteo": {"No conforme": 2}}},
        {"id": "au2", "estado": "pendiente", "sucursalId": "s2", "fechaCreacion": "2024-09-01T09:00:00",
         "resumenClasificaciones": {"condicion": 3, "actitud": 4}},
    ],
}


class InMemorySafetyRepository:
    def __init__(self, snapshot: dict):
        self._data = snapshot

    def _list(self, name, branch_id, key="sucursalId"):
        items = self._data.get(name, [])
        if branch_id is None:
            return list(items)
        return [item for item in items if item.get(key) == branch_id]

    def list_employees(self, branch_id=None):
        return self._list("empleados", branch_id)

    def list_branches(self, branch_id=None):
        return self._list("sucursales", branch_id, key="id")

    def list_accidents(self, branch_id=None):
        return self._list("accidentes", branch_id)

    def list_absences(self, branch_id=None):
        return self._list("ausencias", branch_id)

    def list_trainings(self, branch_id=None):
        return self._list("capacitaciones", branch_id)

    def list_audits(self, branch_id=None):
        return self._list("auditorias", branch_id)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def snapshot():
    return copy.deepcopy(SNAPSHOT)


@pytest.fixture
def repository(snapshot):
    return InMemorySafetyRepository(snapshot)
