from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_FRONTEND_URL
from .core.exceptions import (
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    OutsidePerimeterError,
    TransientError,
    UnauthorizedError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .clock.controller import register as register_clock
from .locations.controller import register as register_locations
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "SMATE server is healthy"

ERROR_STATUS = {
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    InvalidStateError: 409,
    OutsidePerimeterError: 422,
    TransientError: 503,
}


def status_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 400


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def configure_cors(app: Flask, settings) -> None:
    frontend_url = getattr(settings, "FRONTEND_URL", "")
    if not frontend_url:
        logger.warning("FRONTEND_URL not set, defaulting to %s", DEFAULT_FRONTEND_URL)
        frontend_url = DEFAULT_FRONTEND_URL

    if bool(getattr(settings, "CORS_ALLOW_ALL", False)):
        CORS(app, origins="*", supports_credentials=True)
    else:
        CORS(app, origins=[frontend_url], supports_credentials=True)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        response = jsonify({"error": e.code, "message": e.message, "retryable": e.retryable})
        if status == 401:
            response.headers["WWW-Authenticate"] = "Bearer"
        return response, status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.name.upper().replace(" ", "_"), "message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error")
        return jsonify({"error": "INTERNAL", "message": "Internal server error"}), 500


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    configure_cors(app, settings)

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
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            auth_config=getattr(settings, "AUTH_CONFIG"),
            store_timeout=int(getattr(settings, "STORE_TIMEOUT_SECONDS", 5)),
        )

    app.extensions["smate_container"] = container

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "message": HEALTH_MESSAGE})

    register_error_handlers(app)
    register_users(app, container)
    register_locations(app, container)
    register_clock(app, container)
    register_reports(app, container)

    return app
