from __future__ import annotations

from enum import Enum


class AttendanceState(str, Enum):
    """Estado de una sesión de asistencia observado a través de su registro."""

    NO_ENTRY = "NO_ENTRY"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class AttendanceEvent(str, Enum):
    """Eventos que disparan transiciones del estado de asistencia."""

    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"


class CompletionStatus(str, Enum):
    """Etiqueta mostrada en el reporte según exista hora de salida."""

    COMPLETE = "Completa"
    INCOMPLETE = "Incompleta"
