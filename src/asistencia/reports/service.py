from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import format_report_date
from ..core.constants import MISSING_CHECKOUT_PLACEHOLDER
from ..core.enums import CompletionStatus


@dataclass(frozen=True)
class RosterReport:
    start: date
    end: date
    rows: list[dict]
    summary: dict


class ReportService:
    def __init__(self, ledger: AttendanceLedger):
        self._ledger = ledger

    def build_roster(self, *, start: date, end: date) -> RosterReport:
        records = self._ledger.list_for_range(start, end)

        out_rows: list[dict] = []
        complete = 0
        for r in records:
            status = CompletionStatus.COMPLETE if r.is_complete else CompletionStatus.INCOMPLETE
            if r.is_complete:
                complete += 1
            out_rows.append(
                {
                    "id": r.record_id,
                    "nombre": r.name,
                    "fecha": format_report_date(r.work_date),
                    "hora_entrada": r.check_in_time,
                    "hora_salida": r.check_out_time or MISSING_CHECKOUT_PLACEHOLDER,
                    "estado": status.value,
                }
            )

        summary = {
            "total": len(out_rows),
            "completas": complete,
            "incompletas": len(out_rows) - complete,
        }
        return RosterReport(start=start, end=end, rows=out_rows, summary=summary)
