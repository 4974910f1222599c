"""Device hint extraction.

The hint is generated client-side (a random id kept in the browser's
localStorage) and sent with every submission. It is an unauthenticated
correlation token: anyone can forge or clear it, so it only backs the
one-submission-per-day policy and must never be used for access control.
"""
from __future__ import annotations

from typing import Optional

from flask import Request

from ..core.constants import DEVICE_HINT_FIELD, DEVICE_HINT_HEADER


def device_hint_from_request(req: Request) -> Optional[str]:
    """Return the first non-blank hint from JSON body, form, header or cookie."""

    payload = req.get_json(silent=True) if req.is_json else None
    candidates = [
        payload.get(DEVICE_HINT_FIELD) if isinstance(payload, dict) else None,
        req.form.get(DEVICE_HINT_FIELD),
        req.headers.get(DEVICE_HINT_HEADER),
        req.cookies.get(DEVICE_HINT_FIELD),
    ]
    for value in candidates:
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def mask_hint(hint: Optional[str]) -> str:
    if not hint:
        return "<none>"
    return hint[:6] + "..."
