from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .cancellations.controller import register as register_cancellations
from .classes.controller import register as register_classes
from .container import build_container
from .core.constants import DEFAULT_ALLOWED_ABSENCES
from .database.bootstrap import apply_schema, list_tables, missing_tables
from .periods.model import PeriodBounds

logger = logging.getLogger(__name__)


def period_bounds_from(settings) -> PeriodBounds:
    """Resolve the period length bounds once; services only see the resulting values."""
    return PeriodBounds(
        min_days=int(getattr(settings, "PERIOD_DAYS_MIN")),
        max_days=int(getattr(settings, "PERIOD_DAYS_MAX")),
        default_days=int(getattr(settings, "PERIOD_DAYS_DEFAULT")),
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        missing = missing_tables(list_tables(db_config))
        if missing:
            raise RuntimeError(f"schema is missing tables: {', '.join(missing)}")
        logger.info("schema ready")

    container = build_container(
        db_config=db_config,
        period_bounds=period_bounds_from(settings),
        allowed_absences=int(getattr(settings, "ALLOWED_ABSENCES", DEFAULT_ALLOWED_ABSENCES)),
    )

    register_attendance(app, container)
    register_classes(app, container)
    register_cancellations(app, container)

    return app
