from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_sql_file, ensure_sample_data, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .members.controller import register as register_members
from .notifications.controller import register as register_notifications
from .shows.controller import register as register_shows
from .stories.controller import register as register_stories
from .submissions.controller import register as register_submissions
from .web.auth import register_error_handlers

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _prepare_database(settings, db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_sql_file(conn, path=DATABASE_DIR / "seed.sql")
        ensure_sample_data(conn)
        logger.info("sample data ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Passing a ready container skips database bootstrap (tests wire in-memory fakes this way).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _prepare_database(settings, db_config)
        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_members(app, container)
    register_stories(app, container)
    register_attendance(app, container)
    register_shows(app, container)
    register_notifications(app, container)
    register_submissions(app, container)
    register_analytics(app, container)

    return app
