from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository

    ledger: AttendanceLedger
    report_service: ReportService


def build_services(
    attendance_repo: AttendanceRepository,
    *,
    timezone: str = DEFAULT_TIMEZONE,
    rebind_device_on_checkout: bool = True,
) -> Container:
    ledger = AttendanceLedger(
        attendance_repo,
        timezone=timezone,
        rebind_device_on_checkout=rebind_device_on_checkout,
    )
    report_service = ReportService(ledger)

    return Container(
        attendance_repo=attendance_repo,
        ledger=ledger,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    rebind_device_on_checkout: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    attendance_repo = MySQLAttendanceRepository(conn)

    return build_services(
        attendance_repo,
        timezone=timezone,
        rebind_device_on_checkout=rebind_device_on_checkout,
    )
