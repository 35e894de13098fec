import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

FACE_SERVICE_URL = os.getenv("FACE_SERVICE_URL", "http://localhost:5001")
FACE_SERVICE_TIMEOUT = float(os.getenv("FACE_SERVICE_TIMEOUT", "90"))

ON_TIME_DEADLINE = os.getenv("ON_TIME_DEADLINE", "09:00:00")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
