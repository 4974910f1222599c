from __future__ import annotations

import io
import logging

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.datetime_utils import parse_iso_date
from ..common.responses import flash_category
from ..container import Container
from ..core.exceptions import DomainError
from .csv_export import write_roster_csv
from .pdf import render_roster_pdf

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _range_args():
        start_s = (request.args.get("inicio") or "").strip()
        end_s = (request.args.get("fin") or "").strip()
        return start_s, end_s

    def _back_to_report(start_s: str, end_s: str):
        return redirect(url_for("report", inicio=start_s or None, fin=end_s or None))

    def _filename(report, ext: str) -> str:
        return f"reporte_asistencias_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.{ext}"

    @app.route("/reporte", methods=["GET"], endpoint="report")
    def report():
        start_s, end_s = _range_args()
        data = None

        if start_s or end_s:
            if not start_s or not end_s:
                flash("Debes seleccionar ambas fechas", "warning")
            else:
                try:
                    data = container.report_service.build_roster(start=parse_iso_date(start_s), end=parse_iso_date(end_s))
                    flash(f"{data.summary['total']} asistencias encontradas", "success")
                except DomainError as e:
                    logger.warning("report query failed: %s", e)
                    flash(str(e), flash_category(e))

        return render_template(
            "reporte.html",
            start=start_s,
            end=end_s,
            rows=data.rows if data else [],
            summary=data.summary if data else None,
        )

    @app.route("/reporte.pdf", methods=["GET"], endpoint="report_pdf")
    def report_pdf():
        start_s, end_s = _range_args()
        if not start_s or not end_s:
            flash("Debes seleccionar ambas fechas", "warning")
            return _back_to_report(start_s, end_s)

        try:
            data = container.report_service.build_roster(start=parse_iso_date(start_s), end=parse_iso_date(end_s))
            pdf_bytes = render_roster_pdf(data, generated_on=container.ledger.today())
        except DomainError as e:
            flash(str(e), flash_category(e))
            return _back_to_report(start_s, end_s)

        return send_file(
            io.BytesIO(pdf_bytes),
            mimetype="application/pdf",
            as_attachment=False,
            download_name=_filename(data, "pdf"),
        )

    @app.route("/reporte.csv", methods=["GET"], endpoint="report_csv")
    def report_csv():
        start_s, end_s = _range_args()
        if not start_s or not end_s:
            flash("Debes seleccionar ambas fechas", "warning")
            return _back_to_report(start_s, end_s)

        try:
            data = container.report_service.build_roster(start=parse_iso_date(start_s), end=parse_iso_date(end_s))
        except DomainError as e:
            flash(str(e), flash_category(e))
            return _back_to_report(start_s, end_s)

        return app.response_class(
            write_roster_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={_filename(data, 'csv')}"},
        )
