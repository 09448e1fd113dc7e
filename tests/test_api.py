from __future__ import annotations

import importlib
from datetime import datetime, timedelta, timezone

import jwt
import pytest

import config.production
from event_checkin.main import create_app

REGISTRATION = {"name": "A", "phone": "1", "gender": "M", "aadhaarNumber": "X"}


def _register(client, **extra):
    resp = client.post("/register", json={**REGISTRATION, **extra})
    assert resp.status_code == 200
    return resp.get_json()


def test_register_scan_then_manual_end_to_end(client, auth_headers):
    body = _register(client)

    assert body["success"] is True
    assert body["gateStatus"] == "OUT"
    assert body["washroomStatus"] == "OUT"
    assert body["manualCode"]
    assert body["scanUrl"] == f"http://testserver/scan/{body['id']}"
    assert body["qrImageUrl"].startswith("data:image/png;base64,")

    scanned = client.get(f"/scan/{body['id']}?action=gate", headers=auth_headers).get_json()
    assert scanned["success"] is True
    assert scanned["gateStatus"] == "IN"
    assert scanned["message"] == "Gate scan successful"
    assert scanned["time"].endswith("Z")

    manual = client.get(f"/manual?code={body['manualCode']}&action=gate").get_json()
    assert manual["success"] is True
    assert manual["gateStatus"] == "OUT"


def test_register_validation_failures_keep_http_200(client):
    bad_zone = client.post("/register", json={"zoneDay1": "AMU"})
    assert bad_zone.status_code == 200
    assert bad_zone.get_json() == {"success": False, "message": "Invalid zoneDay1 (Example: AMW / AFZ)"}

    bad_ref = client.post("/register", json={"referredBy": "abc"})
    assert bad_ref.get_json() == {"success": False, "message": "Referred By must be a valid number"}

    assert client.get("/users").get_json() == []


def test_register_required_fields_when_configured(make_app):
    client = make_app({"REQUIRED_FIELDS": "name,phone,gender,aadhaarNumber"}).test_client()

    resp = client.post("/register", json={"name": "A"})
    assert resp.get_json() == {"success": False, "message": "phone is required"}


def test_register_accepts_non_json_body(client):
    resp = client.post("/register", data="not json", content_type="text/plain")
    assert resp.get_json()["success"] is True


def test_scan_requires_token(client):
    body = _register(client)

    missing = client.get(f"/scan/{body['id']}?action=gate")
    assert missing.status_code == 401
    assert missing.get_json() == {"success": False, "message": "Scanner login required"}

    bad = client.get(f"/scan/{body['id']}?action=gate", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401
    assert bad.get_json()["message"] == "Invalid/Expired token"


def test_scan_open_when_auth_disabled(make_app):
    client = make_app({"REQUIRE_SCANNER_AUTH": False}).test_client()
    body = _register(client)

    resp = client.get(f"/scan/{body['id']}?action=washroom")
    assert resp.status_code == 200
    assert resp.get_json()["washroomStatus"] == "IN"


def test_scanner_login(client):
    ok = client.post("/scanner-login", json={"password": "scanner-pass"})
    assert ok.status_code == 200
    assert ok.get_json()["success"] is True

    wrong = client.post("/scanner-login", json={"password": "guess"})
    assert wrong.status_code == 401
    assert wrong.get_json() == {"success": False, "message": "Invalid password"}

    assert client.post("/scanner-login", json={}).status_code == 401


@pytest.mark.parametrize("path", ["/scan/999?action=gate", "/scan/not-an-id?action=gate", "/user/999"])
def test_unknown_ids_are_404(client, auth_headers, path):
    resp = client.get(path, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "User not found"}


@pytest.mark.parametrize("query", ["?code=NOPE00&action=gate", "?action=gate", ""])
def test_manual_unknown_code_is_404(client, query):
    resp = client.get(f"/manual{query}")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Invalid manual code"}


def test_unknown_action_returns_current_state(client, auth_headers):
    body = _register(client)

    resp = client.get(f"/scan/{body['id']}?action=lobby", headers=auth_headers).get_json()

    assert resp["success"] is True
    assert resp["message"] == "No checkpoint updated"
    assert resp["gateStatus"] == "OUT" and resp["washroomStatus"] == "OUT"


def test_event_day_restriction(make_app):
    client = make_app({"EVENT_DATE": "2001-01-01", "REQUIRE_SCANNER_AUTH": False}).test_client()
    body = _register(client)

    resp = client.get(f"/scan/{body['id']}?action=gate")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": False, "message": "QR scanning will be active only on event day"}


def test_user_prefill_is_redacted(client, auth_headers):
    body = _register(client, zoneDay1="AFX", referredBy="5")

    resp = client.get(f"/user/{body['id']}", headers=auth_headers).get_json()

    assert resp["success"] is True
    assert resp["user"]["zoneDay2"] == "BFR"
    assert resp["user"]["referredBy"] == 5
    assert resp["user"]["manualCode"] == body["manualCode"]
    assert "gateStatus" not in resp["user"]
    assert "qrImageUrl" not in resp["user"]


def test_user_prefill_requires_token(client):
    body = _register(client)
    assert client.get(f"/user/{body['id']}").status_code == 401


def test_update_flow(client):
    body = _register(client)

    resp = client.post(
        "/update", json={"manualCode": body["manualCode"], "name": "Renamed", "zoneDay1": "amz", "manualCodeX": "?"}
    ).get_json()

    assert resp["success"] is True
    assert resp["message"] == "User updated successfully"
    assert resp["user"]["name"] == "Renamed"
    assert resp["user"]["zoneDay2"] == "BMT"
    assert resp["user"]["manualCode"] == body["manualCode"]


def test_update_rejects_bad_values_without_mutation(client):
    body = _register(client)

    resp = client.post("/update", json={"manualCode": body["manualCode"], "name": "Z", "referredBy": "x"})
    assert resp.get_json() == {"success": False, "message": "Referred By must be a valid number"}

    resp = client.post("/update", json={"manualCode": body["manualCode"], "name": "Z", "zoneDay1": "QQQ"})
    assert resp.get_json()["success"] is False

    assert client.get("/users").get_json()[0]["name"] == "A"


def test_update_unknown_code_is_404(client):
    resp = client.post("/update", json={"manualCode": "NOPE00", "name": "x"})
    assert resp.status_code == 404


def test_users_listed_newest_first(client):
    first = _register(client, name="first")
    second = _register(client, name="second")

    users = client.get("/users").get_json()

    assert [u["id"] for u in users] == [second["id"], first["id"]]
    assert users[0]["qrImageUrl"].startswith("data:image/png")
    assert users[0]["lastGateUpdate"] is None
    assert users[0]["createdAt"]


def test_local_qr_images_are_served(make_app, tmp_path):
    client = make_app({"QR_STORAGE": "local", "QR_LOCAL_DIR": str(tmp_path)}).test_client()
    body = _register(client)

    assert body["qrImageUrl"] == f"http://testserver/qr/{body['id']}.png"
    image = client.get(f"/qr/{body['id']}.png")
    assert image.status_code == 200
    assert image.mimetype == "image/png"
    assert image.data.startswith(b"\x89PNG")

    assert client.get("/qr/missing.png").status_code == 404


def test_qr_route_absent_without_local_storage(client):
    assert client.get("/qr/1.png").status_code == 404


def test_failed_qr_delivery_still_registers(make_app, failing_storage):
    client = make_app(image_storage=failing_storage).test_client()

    body = _register(client)

    assert body["success"] is True
    assert body["qrImageUrl"] is None


def test_store_errors_are_500_without_details(make_app, repo):
    class BrokenRepo(type(repo)):
        def list_newest_first(self):
            raise RuntimeError("connection refused: 10.0.0.5")

    client = make_app(registrants_repo=BrokenRepo()).test_client()

    resp = client.get("/users")
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Server error"}


def test_health(client):
    assert client.get("/health").get_json() == {"success": True, "store": "memory"}


def test_cors_headers(client):
    resp = client.get("/health", headers={"Origin": "http://scanner.test"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_oversized_referred_by_is_a_validation_failure(client):
    huge = 10**400

    resp = client.post("/register", json={"name": "A", "referredBy": huge})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": False, "message": "Referred By must be a valid number"}
    assert client.get("/users").get_json() == []

    body = _register(client)
    resp = client.post("/update", json={"manualCode": body["manualCode"], "referredBy": huge})
    assert resp.status_code == 200
    assert resp.get_json()["success"] is False


@pytest.fixture
def production_client(monkeypatch):
    for name in ("SECRET_KEY", "JWT_SECRET", "SCANNER_PASSWORD", "SCANNER_PASSWORD_HASH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("QR_STORAGE", "inline")
    monkeypatch.setenv("AUTO_INIT_DB", "0")
    monkeypatch.setenv("REQUIRE_SCANNER_AUTH", "1")
    monkeypatch.setenv("EVENT_DATE", "")
    importlib.reload(config.production)
    return create_app().test_client()


@pytest.mark.parametrize("key", ["please-set-SECRET_KEY", "dev-secret-key", "dev-jwt-secret", "test-jwt-secret"])
def test_production_defaults_reject_tokens_signed_with_known_keys(production_client, key):
    body = _register(production_client)
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {"role": "scanner", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        key,
        algorithm="HS256",
    )
    headers = {"Authorization": f"Bearer {forged}"}

    assert production_client.get(f"/scan/{body['id']}?action=gate", headers=headers).status_code == 401
    assert production_client.get(f"/user/{body['id']}", headers=headers).status_code == 401
    assert production_client.post("/scanner-login", json={"password": ""}).status_code == 401
    assert production_client.post("/scanner-login", json={"password": "scanner123"}).status_code == 401
