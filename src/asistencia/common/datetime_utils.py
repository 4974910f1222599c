from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from ..core.constants import CLOCK_FORMAT, DEFAULT_TIMEZONE, ISO_DATE_FORMAT, REPORT_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Fecha inválida: {value!r}") from None


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the configured timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name))


def clock(value: datetime | time) -> str:
    """Minute-resolution wall-clock string (HH:MM)."""
    return value.strftime(CLOCK_FORMAT)


def format_report_date(value: date) -> str:
    return value.strftime(REPORT_DATE_FORMAT)


def format_long_date(value: date) -> str:
    """Spanish long date, e.g. 'miércoles, 10 de enero de 2024'."""
    days = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
    months = [
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ]
    return f"{days[value.weekday()]}, {value.day} de {months[value.month - 1]} de {value.year}"
