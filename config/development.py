import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

# Remote face service (embedding + comparison). Cold starts can take close to a minute.
FACE_SERVICE_URL = os.getenv("FACE_SERVICE_URL", "http://localhost:5001")
FACE_SERVICE_TIMEOUT = float(os.getenv("FACE_SERVICE_TIMEOUT", "90"))

# Check-ins strictly after this time of day are LATE.
ON_TIME_DEADLINE = os.getenv("ON_TIME_DEADLINE", "09:00:00")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
