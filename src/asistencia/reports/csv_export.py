from __future__ import annotations

import csv
import io

from .service import RosterReport

FIELDNAMES = ["nombre", "fecha", "hora_entrada", "hora_salida", "estado"]


def write_roster_csv(report: RosterReport) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=FIELDNAMES, extrasaction="ignore")
    writer.writeheader()
    for row in report.rows:
        writer.writerow(row)

    # BOM so spreadsheet apps detect UTF-8 accents
    return out.getvalue().encode("utf-8-sig")
