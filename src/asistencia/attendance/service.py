from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import clock, now_local
from ..common.validators import require_device_hint, require_name, require_record_id
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceEvent
from ..core.exceptions import AlreadyCheckedOut, DuplicateSubmission, NotFound, ValidationError
from .identity import mask_hint
from .model import AttendanceRecord, CheckInRequest, CheckOutRequest, SubmissionResult
from .repository import AttendanceRepository
from .state import state_of, transition

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Check-in/check-out state machine and the per-device daily guard.

    Guard queries always go to the store. The store's unique index on
    (fecha, device_id) and its conditional check-out update are the final
    word when two submissions race past the pre-checks.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        rebind_device_on_checkout: bool = True,
    ):
        self._attendance = attendance
        self._timezone = timezone
        self._rebind_device = bool(rebind_device_on_checkout)

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or now_local(self._timezone)

    def now(self) -> datetime:
        return self._now(None)

    def today(self, *, now: Optional[datetime] = None) -> date:
        return self._now(now).date()

    def submit_check_in(self, name: Optional[str], device_hint: Optional[str], *, now: Optional[datetime] = None) -> AttendanceRecord:
        name = require_name(name)
        hint = require_device_hint(device_hint)

        now = self._now(now)
        today = now.date()

        existing = self._attendance.find_for_device(today, hint)
        if existing is not None:
            logger.info("check-in rejected: device %s already has record %s on %s", mask_hint(hint), existing.record_id, today)
        transition(state_of(existing), AttendanceEvent.CHECK_IN)

        record = self._attendance.create_checkin(
            name=name,
            work_date=today,
            check_in_time=clock(now),
            device_hint=hint,
        )
        logger.info("check-in %s for %r at %s %s", record.record_id, record.name, record.work_date, record.check_in_time)
        return record

    def submit_check_out(self, record_id, device_hint: Optional[str], *, now: Optional[datetime] = None) -> AttendanceRecord:
        hint = require_device_hint(device_hint)
        record_id = require_record_id(record_id)

        now = self._now(now)
        today = now.date()

        record = self._attendance.get_by_id(record_id)
        if record is None or record.work_date != today:
            raise NotFound()
        transition(state_of(record), AttendanceEvent.CHECK_OUT)

        if self._attendance.has_checkout_for_device(today, hint):
            logger.info("check-out rejected: device %s already checked out on %s", mask_hint(hint), today)
            raise DuplicateSubmission("Ya se registró una salida desde este dispositivo hoy")

        check_out_time = clock(now)
        updated = self._attendance.update_checkout(
            record_id=record.record_id,
            check_out_time=check_out_time,
            device_hint=hint,
            rebind_device=self._rebind_device,
        )
        if not updated:
            # lost the race against another check-out of the same record
            logger.warning("check-out of %s matched no open record", record.record_id)
            raise AlreadyCheckedOut()

        logger.info("check-out %s for %r at %s", record.record_id, record.name, check_out_time)
        return replace(
            record,
            check_out_time=check_out_time,
            device_hint=hint if self._rebind_device else record.device_hint,
            checkout_device_hint=hint,
        )

    def submit(self, request: CheckInRequest | CheckOutRequest, *, now: Optional[datetime] = None) -> SubmissionResult:
        if isinstance(request, CheckInRequest):
            record = self.submit_check_in(request.name, request.device_hint, now=now)
            return SubmissionResult(record, f"Entrada registrada para {record.name} a las {record.check_in_time}")
        if isinstance(request, CheckOutRequest):
            record = self.submit_check_out(request.record_id, request.device_hint, now=now)
            return SubmissionResult(record, f"Salida registrada para {record.name} a las {record.check_out_time}")
        raise TypeError(f"Unsupported submission: {type(request)!r}")

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return list(self._attendance.list_for_date(work_date))

    def checkout_worklist(self, *, now: Optional[datetime] = None) -> Sequence[AttendanceRecord]:
        return self.list_for_date(self.today(now=now))

    def list_for_range(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        if start_date > end_date:
            raise ValidationError("La fecha de inicio no puede ser posterior a la fecha de fin")
        return list(self._attendance.list_for_range(start_date=start_date, end_date=end_date))
