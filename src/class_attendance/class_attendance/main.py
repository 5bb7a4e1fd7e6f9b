from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .class_counter.controller import register as register_class_counter
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, db_config_from_dict, list_tables
from .statistics.controller import register as register_statistics

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False
    app.logger.setLevel(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        app.logger.info(
            "[class-attendance] settings=%s db=%s", settings_module, db_config_from_dict(db_config).describe()
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("[class-attendance] schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("[class-attendance] demo seed ready")

        container = build_container(
            db_config=db_config,
            stats_epoch=getattr(settings, "STATS_EPOCH"),
            class_counter_key=getattr(settings, "CLASS_COUNTER_KEY"),
            enforce_one_per_day=bool(getattr(settings, "ENFORCE_ONE_RECORD_PER_DAY", False)),
        )

    register_error_handlers(app)
    register_attendance(app, container)
    register_statistics(app, container)
    register_class_counter(app, container)

    return app
