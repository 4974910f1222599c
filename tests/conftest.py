from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from asistencia.attendance.model import AttendanceRecord
from asistencia.attendance.service import AttendanceLedger
from asistencia.core.exceptions import DuplicateSubmission

TZ = ZoneInfo("America/Mexico_City")


class InMemoryAttendance:
    """Record store fake with the same constraints as the MySQL table."""

    def __init__(self):
        self._rows: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.calls: list[str] = []

    def add(self, **kwargs) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(record_id=self._id, **kwargs)
        self._rows[rec.record_id] = rec
        return rec

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        self.calls.append("get_by_id")
        return self._rows.get(record_id)

    def find_for_device(self, work_date: date, device_hint: str) -> Optional[AttendanceRecord]:
        self.calls.append("find_for_device")
        for r in self._rows.values():
            if r.work_date == work_date and r.device_hint == device_hint:
                return r
        return None

    def has_checkout_for_device(self, work_date: date, device_hint: str) -> bool:
        self.calls.append("has_checkout_for_device")
        return any(
            r.work_date == work_date and r.checkout_device_hint == device_hint and r.check_out_time
            for r in self._rows.values()
        )

    def _unique_violation(self, work_date: date, device_hint: str, *, exclude: int | None = None) -> bool:
        return any(
            r.work_date == work_date and r.device_hint == device_hint and r.record_id != exclude
            for r in self._rows.values()
        )

    def create_checkin(self, *, name: str, work_date: date, check_in_time: str, device_hint: str) -> AttendanceRecord:
        self.calls.append("create_checkin")
        if self._unique_violation(work_date, device_hint):
            raise DuplicateSubmission("Ya se registró una entrada desde este dispositivo hoy")
        return self.add(name=name, work_date=work_date, check_in_time=check_in_time, device_hint=device_hint)

    def update_checkout(self, *, record_id: int, check_out_time: str, device_hint: str, rebind_device: bool = False) -> bool:
        self.calls.append("update_checkout")
        rec = self._rows.get(record_id)
        if rec is None or rec.check_out_time is not None:
            return False
        if rebind_device and self._unique_violation(rec.work_date, device_hint, exclude=record_id):
            raise DuplicateSubmission("Este dispositivo ya tiene otro registro hoy")
        self._rows[record_id] = replace(
            rec,
            check_out_time=check_out_time,
            device_hint=device_hint if rebind_device else rec.device_hint,
            checkout_device_hint=device_hint,
        )
        return True

    def list_for_date(self, work_date: date):
        self.calls.append("list_for_date")
        items = [r for r in self._rows.values() if r.work_date == work_date]
        items.sort(key=lambda r: (r.check_in_time, r.record_id))
        return items

    def list_for_range(self, *, start_date: date, end_date: date):
        self.calls.append("list_for_range")
        items = [r for r in self._rows.values() if start_date <= r.work_date <= end_date]
        items.sort(key=lambda r: (r.work_date, r.check_in_time, r.record_id))
        return items


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 10, 9, 0, 27, tzinfo=TZ)


@pytest.fixture
def store() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def ledger(store) -> AttendanceLedger:
    return AttendanceLedger(store, timezone="America/Mexico_City")
