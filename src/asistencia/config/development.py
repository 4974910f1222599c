import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "asistencia_db"),
}

# Attendance day and HH:MM stamps are computed in this timezone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Mexico_City")

# Re-record the device hint on the row when it is checked out
REBIND_DEVICE_ON_CHECKOUT = bool(int(os.getenv("REBIND_DEVICE_ON_CHECKOUT", "1")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
