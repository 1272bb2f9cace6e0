from __future__ import annotations

from enum import Enum


class EmployeeStatus(str, Enum):
    """Estado del empleado tal como lo guarda el almacén de documentos."""

    ACTIVE = "activo"
    INACTIVE = "inactivo"


class EmployeeRole(str, Enum):
    OPERATOR = "operativo"
    ADMINISTRATIVE = "administrativo"


class AccidentKind(str, Enum):
    ACCIDENT = "accidente"
    INCIDENT = "incidente"


class AccidentStatus(str, Enum):
    OPEN = "abierto"
    CLOSED = "cerrado"


class CaseType(str, Enum):
    """Tipo resuelto de una ausencia / caso de salud ocupacional."""

    COVID = "covid"
    OCCUPATIONAL = "ocupacional"
    ACCIDENT = "accidente"
    SPECIAL_LEAVE = "licencia"
    ILLNESS = "enfermedad"
    OTHER = "otro"


class TrainingKind(str, Enum):
    TALK = "charla"
    DRILL = "entrenamiento"
    FORMAL = "capacitacion"


class TrainingStatus(str, Enum):
    COMPLETED = "completada"
    ACTIVE = "activa"


class VariationKind(str, Enum):
    """Clasificación de la variación interanual de un índice."""

    IMPROVEMENT = "mejora"
    WORSENING = "empeora"
    NO_CHANGE = "sin_cambio"
    NEW = "nuevo"


class AlertSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
