"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ISO_DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"
REPORT_DATE_FORMAT = "%d/%m/%Y"

DEFAULT_TIMEZONE = "America/Mexico_City"
MISSING_CHECKOUT_PLACEHOLDER = "-"

DEVICE_HINT_FIELD = "device_id"
DEVICE_HINT_HEADER = "X-Device-Id"
DEVICE_HINT_MAX_LENGTH = 128
