from __future__ import annotations

from typing import Any, Dict

from flask import Flask, jsonify, request

from ..auth.controller import scanner_required
from ..container import Container


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def register(app: Flask, container: Container) -> None:
    @app.route("/register", methods=["POST"], endpoint="register")
    def register_registrant():
        result = container.registration_service.register(_json_body())
        registrant = result.registrant
        return jsonify(
            {
                "success": True,
                **registrant.to_public(),
                "scanUrl": result.scan_url,
                "qrImageUrl": registrant.qr_image_url,
            }
        )

    @app.route("/user/<registrant_id>", methods=["GET"], endpoint="user_prefill")
    @scanner_required(container)
    def user_prefill(registrant_id: str):
        registrant = container.registrant_service.get(registrant_id)
        return jsonify({"success": True, "user": registrant.to_prefill()})

    @app.route("/update", methods=["POST"], endpoint="update")
    def update_registrant():
        registrant = container.registrant_service.update_by_manual_code(_json_body())
        return jsonify({"success": True, "message": "User updated successfully", "user": registrant.to_dict()})

    @app.route("/users", methods=["GET"], endpoint="users")
    def list_registrants():
        return jsonify([r.to_dict() for r in container.registrant_service.list_all()])
