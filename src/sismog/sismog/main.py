from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, session

from config import get_settings_module

from .auth.controller import register as register_auth
from .companies.controller import register as register_companies
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .employees.controller import register as register_employees
from .penalties.controller import register as register_penalties
from .profiles.controller import register as register_profiles
from .resources.feedback import FeedbackChannel

REPO_ROOT = Path(__file__).resolve().parents[3]

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["LOG_RESET_LINKS"] = bool(getattr(settings, "LOG_RESET_LINKS", False))

    log_level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s %(message)s")

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

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_admin(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            min_password_length=int(getattr(settings, "MIN_PASSWORD_LENGTH", 6)),
        )

    @app.context_processor
    def inject_feedback():
        return {"feedback": FeedbackChannel(session).current, "current_email": session.get("email")}

    register_auth(app, container)
    register_companies(app, container)
    register_employees(app, container)
    register_penalties(app, container)
    register_profiles(app, container)

    return app
