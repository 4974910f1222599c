from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import clock, format_long_date, parse_iso_date
from ..common.responses import flash_category, json_error, json_system_error
from ..container import Container
from ..core.exceptions import DomainError
from .identity import device_hint_from_request
from .model import CheckInRequest, CheckOutRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    ledger = container.ledger

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        now = ledger.now()
        return render_template("index.html", today_label=format_long_date(now.date()), now_label=clock(now))

    @app.route("/entrada", methods=["POST"], endpoint="checkin")
    def checkin():
        try:
            result = ledger.submit(
                CheckInRequest(
                    name=request.form.get("nombre"),
                    device_hint=device_hint_from_request(request),
                )
            )
            flash(result.message, "success")
            return redirect(url_for("saludo"))
        except DomainError as e:
            flash(str(e), flash_category(e))
        except Exception:
            logger.exception("unexpected error on check-in")
            flash("Ocurrió un error al registrar", "danger")
        return redirect(url_for("index"))

    @app.route("/saludo", methods=["GET"], endpoint="saludo")
    def saludo():
        return render_template("saludo.html")

    @app.route("/salida", methods=["GET"], endpoint="checkout_list")
    def checkout_list():
        today = ledger.today()
        try:
            records = ledger.checkout_worklist()
        except DomainError as e:
            flash(f"Error al cargar los registros: {e}", "danger")
            records = []
        return render_template("salida.html", today_label=format_long_date(today), records=records)

    @app.route("/salida/<int:record_id>", methods=["POST"], endpoint="checkout")
    def checkout(record_id: int):
        try:
            result = ledger.submit(CheckOutRequest(record_id=record_id, device_hint=device_hint_from_request(request)))
            flash(result.message, "success")
            return redirect(url_for("saludo"))
        except DomainError as e:
            flash(str(e), flash_category(e))
        except Exception:
            logger.exception("unexpected error on check-out of %s", record_id)
            flash("Ocurrió un error al registrar la salida", "danger")
        return redirect(url_for("checkout_list"))

    @app.route("/api/asistencia", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            result = ledger.submit(CheckInRequest(name=data.get("nombre"), device_hint=device_hint_from_request(request)))
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("unexpected error on api check-in")
            return json_system_error("Ocurrió un error al registrar")
        return jsonify({"success": True, "message": result.message, "record": result.record.to_dict()}), 201

    @app.route("/api/asistencia/<int:record_id>/salida", methods=["POST"], endpoint="api_checkout")
    def api_checkout(record_id: int):
        try:
            result = ledger.submit(CheckOutRequest(record_id=record_id, device_hint=device_hint_from_request(request)))
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("unexpected error on api check-out of %s", record_id)
            return json_system_error("Ocurrió un error al registrar la salida")
        return jsonify({"success": True, "message": result.message, "record": result.record.to_dict()}), 200

    @app.route("/api/asistencia", methods=["GET"], endpoint="api_list")
    def api_list():
        """List one day (?fecha=) or a range (?inicio=&fin=); defaults to today."""

        try:
            fecha = request.args.get("fecha")
            start_s = request.args.get("inicio")
            end_s = request.args.get("fin")
            if start_s or end_s:
                if not start_s or not end_s:
                    return jsonify({"success": False, "error": "validation_error", "message": "Debes seleccionar ambas fechas"}), 400
                records = ledger.list_for_range(parse_iso_date(start_s), parse_iso_date(end_s))
            else:
                work_date = parse_iso_date(fecha) if fecha else ledger.today()
                records = ledger.list_for_date(work_date)
        except DomainError as e:
            return json_error(e)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})
