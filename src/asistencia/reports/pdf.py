from __future__ import annotations

import io
from datetime import date
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..common.datetime_utils import format_report_date
from ..core.exceptions import ValidationError
from .service import RosterReport

HEADERS = ["Nombre", "Fecha", "Hora Entrada", "Hora Salida", "Firma"]
COLUMN_WIDTHS = [50 * mm, 30 * mm, 30 * mm, 30 * mm, 40 * mm]
HEADER_FILL = colors.Color(59 / 255, 130 / 255, 246 / 255)

HEADER_HEIGHT = 8 * mm
ROW_HEIGHT = 15 * mm
FIRST_TABLE_TOP = 40 * mm
NEXT_TABLE_TOP = 20 * mm
BOTTOM_RESERVE = 25 * mm


def _rows_per_page(table_top: float, page_height: float) -> int:
    usable = page_height - table_top - BOTTOM_RESERVE - HEADER_HEIGHT
    return max(1, int(usable // ROW_HEIGHT))


def paginate(rows: list[dict], *, page_height: float = letter[1]) -> list[list[dict]]:
    """Split rows into pages; the first page loses space to the title block."""
    first = _rows_per_page(FIRST_TABLE_TOP, page_height)
    rest = _rows_per_page(NEXT_TABLE_TOP, page_height)

    pages = [rows[:first]]
    i = first
    while i < len(rows):
        pages.append(rows[i:i + rest])
        i += rest
    return pages


def _fit(text: str, width: float, font: str, size: float) -> str:
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text + "..."


def _draw_header_row(c: canvas.Canvas, left: float, y_top: float) -> None:
    c.setFillColor(HEADER_FILL)
    c.rect(left, y_top - HEADER_HEIGHT, sum(COLUMN_WIDTHS), HEADER_HEIGHT, stroke=0, fill=1)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 9)
    x = left
    for title, width in zip(HEADERS, COLUMN_WIDTHS):
        c.drawCentredString(x + width / 2, y_top - HEADER_HEIGHT + 2.8 * mm, title)
        x += width


def _draw_body_row(c: canvas.Canvas, row: dict, left: float, y_top: float) -> None:
    values = [row["nombre"], row["fecha"], row["hora_entrada"], row["hora_salida"], ""]
    y_bottom = y_top - ROW_HEIGHT

    c.setStrokeColor(colors.lightgrey)
    c.setLineWidth(0.3)
    c.line(left, y_bottom, left + sum(COLUMN_WIDTHS), y_bottom)

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 8)
    x = left
    for value, width in zip(values, COLUMN_WIDTHS):
        text = _fit(str(value), width - 4 * mm, "Helvetica", 8)
        c.drawCentredString(x + width / 2, y_bottom + ROW_HEIGHT / 2 - 1 * mm, text)
        x += width

    # signature line in the last column
    sig_left = left + sum(COLUMN_WIDTHS[:-1])
    c.setStrokeColor(colors.Color(150 / 255, 150 / 255, 150 / 255))
    c.line(sig_left + 5 * mm, y_bottom + 5 * mm, sig_left + COLUMN_WIDTHS[-1] - 5 * mm, y_bottom + 5 * mm)


def render_roster_pdf(report: RosterReport, *, generated_on: Optional[date] = None) -> bytes:
    if not report.rows:
        raise ValidationError("No hay datos para generar el reporte")

    generated_on = generated_on or date.today()
    width, height = letter
    left = (width - sum(COLUMN_WIDTHS)) / 2
    pages = paginate(report.rows, page_height=height)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    c.setTitle("Reporte de asistencias")

    for page_no, chunk in enumerate(pages, start=1):
        if page_no == 1:
            c.setFillColor(colors.black)
            c.setFont("Helvetica-Bold", 16)
            c.drawCentredString(width / 2, height - 20 * mm, "REPORTE DE ASISTENCIAS")
            c.setFont("Helvetica", 12)
            c.drawCentredString(
                width / 2,
                height - 30 * mm,
                f"Del {format_report_date(report.start)} al {format_report_date(report.end)}",
            )
            y = height - FIRST_TABLE_TOP
        else:
            y = height - NEXT_TABLE_TOP

        _draw_header_row(c, left, y)
        y -= HEADER_HEIGHT
        for row in chunk:
            _draw_body_row(c, row, left, y)
            y -= ROW_HEIGHT

        c.setFillColor(colors.grey)
        c.setFont("Helvetica", 8)
        c.drawString(left, 10 * mm, f"Página {page_no} de {len(pages)}")
        if page_no == len(pages):
            c.setFont("Helvetica", 10)
            c.drawCentredString(width / 2, 20 * mm, f"Generado el {format_report_date(generated_on)}")
        c.showPage()

    c.save()
    return buffer.getvalue()
