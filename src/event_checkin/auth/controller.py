from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, g, jsonify, request

from ..container import Container
from ..core.exceptions import AuthenticationError
from .service import bearer_token


def scanner_required(container: Container):
    """Decorator factory: require a valid scanner token when auth is enabled."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if container.settings.require_scanner_auth:
                token = bearer_token(request.headers.get("Authorization"))
                g.scanner = container.scanner_auth_service.verify(token)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register(app: Flask, container: Container) -> None:
    @app.route("/scanner-login", methods=["POST"], endpoint="scanner_login")
    def scanner_login():
        body = request.get_json(silent=True)
        password = body.get("password") if isinstance(body, dict) else None
        try:
            token = container.scanner_auth_service.login(password)
        except AuthenticationError:
            current_app.logger.warning("Rejected scanner login from %s", request.remote_addr)
            raise
        return jsonify({"success": True, "token": token})
