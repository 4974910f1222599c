from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import DuplicateSubmission, StoreUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, nombre, fecha, hora_entrada, hora_salida, device_id, device_salida"


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value), ISO_DATE_FORMAT).date()


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["id"]),
        name=r["nombre"],
        work_date=_as_date(r["fecha"]),
        check_in_time=str(r["hora_entrada"]),
        check_out_time=r.get("hora_salida") or None,
        device_hint=r.get("device_id"),
        checkout_device_hint=r.get("device_salida"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM asistencia WHERE id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_for_device(self, work_date: date, device_hint: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM asistencia
                WHERE fecha=%s AND device_id=%s
                ORDER BY id ASC
                LIMIT 1
                """,
                (work_date, device_hint),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def has_checkout_for_device(self, work_date: date, device_hint: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM asistencia
                WHERE fecha=%s AND device_salida=%s AND hora_salida IS NOT NULL
                """,
                (work_date, device_hint),
            )
            r = fetchone(cur)
            return bool(r and int(r["n"]) > 0)

    def create_checkin(
        self,
        *,
        name: str,
        work_date: date,
        check_in_time: str,
        device_hint: str,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO asistencia(nombre, fecha, hora_entrada, hora_salida, device_id)
                    VALUES(%s,%s,%s,NULL,%s)
                    """,
                    (name, work_date, check_in_time, device_hint),
                )
                record_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateSubmission("Ya se registró una entrada desde este dispositivo hoy") from exc
            raise StoreUnavailable() from exc

        return AttendanceRecord(
            record_id=record_id,
            name=name,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            device_hint=device_hint,
        )

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out_time: str,
        device_hint: str,
        rebind_device: bool = False,
    ) -> bool:
        assignments = "hora_salida=%s, device_salida=%s"
        params: tuple = (check_out_time, device_hint)
        if rebind_device:
            assignments += ", device_id=%s"
            params += (device_hint,)

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    UPDATE asistencia
                    SET {assignments}
                    WHERE id=%s AND hora_salida IS NULL
                    """,
                    params + (int(record_id),),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                # rebinding would give this device a second record today
                raise DuplicateSubmission("Este dispositivo ya tiene otro registro hoy") from exc
            raise StoreUnavailable() from exc

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM asistencia
                WHERE fecha=%s
                ORDER BY hora_entrada ASC, id ASC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_range(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM asistencia
                WHERE fecha BETWEEN %s AND %s
                ORDER BY fecha ASC, hora_entrada ASC, id ASC
                """,
                (start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]
