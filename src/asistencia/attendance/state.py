"""Attendance state machine.

NO_ENTRY -> CHECKED_IN -> CHECKED_OUT (terminal). Pure functions only; the
ledger feeds them the state observed in the store.
"""
from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceEvent, AttendanceState
from ..core.exceptions import AlreadyCheckedOut, DuplicateSubmission, NotFound
from .model import AttendanceRecord

_TRANSITIONS = {
    (AttendanceState.NO_ENTRY, AttendanceEvent.CHECK_IN): AttendanceState.CHECKED_IN,
    (AttendanceState.CHECKED_IN, AttendanceEvent.CHECK_OUT): AttendanceState.CHECKED_OUT,
}


def state_of(record: Optional[AttendanceRecord]) -> AttendanceState:
    if record is None:
        return AttendanceState.NO_ENTRY
    return record.state


def transition(state: AttendanceState, event: AttendanceEvent) -> AttendanceState:
    nxt = _TRANSITIONS.get((state, event))
    if nxt is not None:
        return nxt

    if event is AttendanceEvent.CHECK_IN:
        raise DuplicateSubmission("Ya se registró una entrada desde este dispositivo hoy")
    if state is AttendanceState.CHECKED_OUT:
        raise AlreadyCheckedOut()
    raise NotFound("No hay un registro de entrada para registrar la salida")
