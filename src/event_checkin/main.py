from __future__ import annotations

import importlib
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .auth.controller import register as register_auth
from .checkin.controller import register as register_checkin
from .container import Container, build_container
from .core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .qr.controller import register as register_qr_images
from .qr.storage import LocalDiskImageStorage
from .registrants.controller import register as register_registrants
from .settings import AppSettings


def _failure(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    # Validation failures keep HTTP 200 with success=false, which existing clients expect.
    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return _failure(str(e), 200)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return _failure(str(e), 404)

    @app.errorhandler(AuthenticationError)
    def handle_unauthenticated(e: AuthenticationError):
        return _failure(str(e), 401)

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return _failure(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error: %s", e)
        return _failure("Server error", 500)


def _load_settings_module() -> dict:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    values = {name: getattr(module, name) for name in dir(module) if name.isupper()}
    values["SETTINGS_MODULE"] = settings_module
    return values


def create_app(overrides: Optional[Mapping[str, Any]] = None, **container_parts: Any) -> Flask:
    """Application factory.

    ``overrides`` replaces individual settings; ``container_parts`` (registrants_repo,
    image_storage) swap collaborators, which tests use to inject fakes.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    app.config.update(_load_settings_module())
    if overrides:
        app.config.update(overrides)
    settings = AppSettings.from_mapping(app.config)
    app.secret_key = settings.secret_key

    if settings.debug:
        app.logger.info(
            "[event-checkin] settings=%s store=%s db=%s qr=%s auth=%s",
            app.config.get("SETTINGS_MODULE"),
            settings.store_backend.value,
            settings.db_config.get("database"),
            settings.qr_storage.value,
            "on" if settings.require_scanner_auth else "off",
        )

    if settings.require_scanner_auth and not settings.jwt_secret:
        app.logger.warning(
            "[event-checkin] JWT_SECRET is not set; scanner login and protected routes will refuse every request"
        )

    container = build_container(settings, **container_parts)
    app.extensions["event_checkin"] = container

    if settings.auto_init_db and container.conn is not None:
        apply_schema(container.conn)
        app.logger.info("[event-checkin] schema ready (tables=%d)", len(list_tables(container.conn)))

    CORS(app, send_wildcard=True)
    register_error_handlers(app)
    register_auth(app, container)
    register_registrants(app, container)
    register_checkin(app, container)
    if isinstance(container.image_storage, LocalDiskImageStorage):
        register_qr_images(app, container.image_storage)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "store": settings.store_backend.value})

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["event_checkin"]
