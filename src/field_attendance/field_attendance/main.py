from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .common.logging_utils import setup_logging
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, MIN_PASSWORD_LENGTH
from .database.bootstrap import apply_schema, ensure_seed_admin, list_tables
from .reports.controller import register as register_reports
from .tokens.controller import register as register_tokens
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Tests pass a container wired over in-memory repositories; otherwise the
    MySQL container is built from the selected settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if not app.config["TESTING"]:
        setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_format=bool(getattr(settings, "LOG_JSON", False)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "app_starting",
            extra={
                "settings": settings_module,
                "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
            },
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema_ready", extra={"tables": len(list_tables(db_config))})
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_password = getattr(settings, "SEED_ADMIN_PASSWORD", "")
            if seed_password:
                ensure_seed_admin(
                    db_config,
                    user_id=getattr(settings, "SEED_ADMIN_ID", "admin"),
                    name=getattr(settings, "SEED_ADMIN_NAME", "Administrator"),
                    password=seed_password,
                )
            else:
                logger.warning("seed_admin_skipped", extra={"reason": "SEED_ADMIN_PASSWORD is empty"})

        container = build_container(
            db_config=db_config,
            min_password_length=int(getattr(settings, "MIN_PASSWORD_LENGTH", MIN_PASSWORD_LENGTH)),
        )

    app.extensions["field_attendance"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_tokens(app, container)
    register_attendance(app, container)
    register_audit(app, container)
    register_reports(app, container)

    return app
