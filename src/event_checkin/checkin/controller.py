from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.controller import scanner_required
from ..common.datetime_utils import to_iso
from ..container import Container
from .service import ScanOutcome


def _scan_response(outcome: ScanOutcome):
    return jsonify(
        {
            "success": True,
            "message": outcome.message,
            **outcome.registrant.to_public(),
            "time": to_iso(outcome.time),
        }
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/scan/<registrant_id>", methods=["GET"], endpoint="scan")
    @scanner_required(container)
    def scan(registrant_id: str):
        outcome = container.checkin_service.scan_by_id(registrant_id, request.args.get("action"))
        return _scan_response(outcome)

    @app.route("/manual", methods=["GET"], endpoint="manual")
    def manual():
        outcome = container.checkin_service.scan_by_manual_code(request.args.get("code"), request.args.get("action"))
        return _scan_response(outcome)
