from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_for_device(self, work_date: date, device_hint: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def has_checkout_for_device(self, work_date: date, device_hint: str) -> bool:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        name: str,
        work_date: date,
        check_in_time: str,
        device_hint: str,
    ) -> AttendanceRecord:
        """Insert a new open record.

        Raises DuplicateSubmission when the store already holds a record for
        (work_date, device_hint).
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out_time: str,
        device_hint: str,
        rebind_device: bool = False,
    ) -> bool:
        """Set the check-out time only if it is still empty.

        device_hint is stored as the record's check-out device. With
        rebind_device it also replaces the check-in device, which raises
        DuplicateSubmission when that device already owns another record of
        the same day. Returns False when no open record matched.
        """

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_range(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
