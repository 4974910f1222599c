from __future__ import annotations

from typing import Optional

from ..core.constants import DEVICE_HINT_MAX_LENGTH
from ..core.exceptions import EmptyName, IdentityUnavailable, ValidationError


def require_name(value: Optional[str]) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError("Nombre inválido")
    if not value or not value.strip():
        raise EmptyName()
    return value.strip()


def require_device_hint(value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise IdentityUnavailable()
    hint = str(value).strip()
    if len(hint) > DEVICE_HINT_MAX_LENGTH:
        raise ValidationError("Identificador de dispositivo inválido")
    return hint


def require_record_id(value) -> int:
    try:
        record_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Registro inválido") from None
    if record_id <= 0:
        raise ValidationError("Registro inválido")
    return record_id
