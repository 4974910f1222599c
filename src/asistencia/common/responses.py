from __future__ import annotations

from flask import jsonify

from ..core.exceptions import DomainError, DuplicateSubmission, NotFound, StoreUnavailable, ValidationError

_STATUS_BY_ERROR = (
    (NotFound, 404),
    (DuplicateSubmission, 409),
    (StoreUnavailable, 503),
    (ValidationError, 400),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def flash_category(exc: DomainError) -> str:
    return "danger" if isinstance(exc, StoreUnavailable) else "warning"


def json_error(exc: DomainError):
    return jsonify({"success": False, "error": exc.code, "message": str(exc)}), status_for(exc)


def json_system_error(message: str):
    return jsonify({"success": False, "error": "system_error", "message": message}), 500
