from __future__ import annotations

from datetime import date

import pytest

from asistencia.core.exceptions import ValidationError
from asistencia.reports.csv_export import write_roster_csv
from asistencia.reports.pdf import paginate, render_roster_pdf
from asistencia.reports.service import RosterReport


def _row(i: int) -> dict:
    return {
        "id": i,
        "nombre": f"Persona {i}",
        "fecha": "10/01/2024",
        "hora_entrada": "09:00",
        "hora_salida": "-",
        "estado": "Incompleta",
    }


def _report(n: int) -> RosterReport:
    rows = [_row(i) for i in range(1, n + 1)]
    return RosterReport(start=date(2024, 1, 10), end=date(2024, 1, 10), rows=rows, summary={"total": n})


def test_pdf_is_rendered():
    pdf = render_roster_pdf(_report(3), generated_on=date(2024, 1, 10))

    assert pdf.startswith(b"%PDF")


def test_pdf_with_long_names_and_many_rows():
    report = _report(40)
    report.rows[0]["nombre"] = "Nombre extremadamente largo que no cabe en la columna de la tabla"

    assert render_roster_pdf(report).startswith(b"%PDF")


def test_pdf_requires_rows():
    with pytest.raises(ValidationError):
        render_roster_pdf(_report(0))


def test_paginate_keeps_every_row_once():
    rows = [_row(i) for i in range(1, 31)]
    pages = paginate(rows)

    assert [len(p) for p in pages] == [13, 15, 2]
    assert [r["id"] for p in pages for r in p] == list(range(1, 31))


def test_csv_has_header_and_bom():
    data = write_roster_csv(_report(2))

    assert data.startswith(b"\xef\xbb\xbf")
    lines = data.decode("utf-8-sig").splitlines()
    assert lines[0] == "nombre,fecha,hora_entrada,hora_salida,estado"
    assert lines[1] == "Persona 1,10/01/2024,09:00,-,Incompleta"
    assert len(lines) == 3
