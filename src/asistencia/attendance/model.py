from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import ISO_DATE_FORMAT
from ..core.enums import AttendanceState


@dataclass(frozen=True)
class AttendanceRecord:
    """Entidad de dominio: un registro de asistencia (entrada y salida)."""

    record_id: int
    name: str
    work_date: date
    check_in_time: str
    check_out_time: Optional[str] = None
    device_hint: Optional[str] = None
    checkout_device_hint: Optional[str] = None

    @property
    def state(self) -> AttendanceState:
        if self.check_out_time:
            return AttendanceState.CHECKED_OUT
        return AttendanceState.CHECKED_IN

    @property
    def is_complete(self) -> bool:
        return self.state is AttendanceState.CHECKED_OUT

    def to_dict(self) -> dict:
        # device hint is never echoed back to clients
        return {
            "id": self.record_id,
            "nombre": self.name,
            "fecha": self.work_date.strftime(ISO_DATE_FORMAT),
            "hora_entrada": self.check_in_time,
            "hora_salida": self.check_out_time,
        }


@dataclass(frozen=True)
class CheckInRequest:
    name: Optional[str]
    device_hint: Optional[str]


@dataclass(frozen=True)
class CheckOutRequest:
    record_id: object
    device_hint: Optional[str]


@dataclass(frozen=True)
class SubmissionResult:
    """Response of a successful submission: the stored record plus the user message."""

    record: AttendanceRecord
    message: str
