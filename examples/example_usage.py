"""Example: use the service layer directly (no Flask).

Controllers stay thin, the attendance rules live in AttendanceLedger.
"""

import importlib

from dotenv import load_dotenv

from asistencia.config import get_settings_module
from asistencia.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.APP_TIMEZONE)
    for record in container.ledger.checkout_worklist():
        print(record.to_dict())


if __name__ == "__main__":
    main()
