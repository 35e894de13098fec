from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_clock_time
from .container import build_container
from .core.constants import DEFAULT_FACE_SERVICE_TIMEOUT, MIN_FACE_SERVICE_TIMEOUT
from .database.bootstrap import apply_schema, list_tables
from .enrollment.controller import register as register_enrollment

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(app: Flask, *, level: str = "INFO") -> None:
    """Route the package loggers through the Flask app logger's handlers."""

    log_level = getattr(logging, str(level).upper(), logging.INFO)
    package_logger = logging.getLogger("src.geo_attendance.geo_attendance")
    package_logger.setLevel(log_level)

    if not package_logger.handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(stream)

    if not app.debug and not app.testing:
        os.makedirs("logs", exist_ok=True)
        file_handler = logging.FileHandler("logs/app.log")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(log_level)
        package_logger.addHandler(file_handler)
        app.logger.addHandler(file_handler)

    app.logger.setLevel(log_level)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    setup_logging(app, level=getattr(settings, "LOG_LEVEL", "INFO"))

    timeout = float(getattr(settings, "FACE_SERVICE_TIMEOUT", DEFAULT_FACE_SERVICE_TIMEOUT))
    if timeout < MIN_FACE_SERVICE_TIMEOUT:
        app.logger.warning(
            "FACE_SERVICE_TIMEOUT=%ss is below %ss; cold starts of the face service may time out",
            timeout,
            MIN_FACE_SERVICE_TIMEOUT,
        )

    app.logger.info(
        "[geo-attendance] settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        app.logger.info("[geo-attendance] schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        face_service_url=getattr(settings, "FACE_SERVICE_URL"),
        face_service_timeout=timeout,
        on_time_deadline=parse_clock_time(getattr(settings, "ON_TIME_DEADLINE", "09:00:00")),
    )

    register_attendance(app, container)
    register_enrollment(app, container)

    return app
