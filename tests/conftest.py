from __future__ import annotations

from datetime import datetime, timezone

import pytest

from event_checkin.core.exceptions import StorageError
from event_checkin.main import create_app, get_container
from event_checkin.registrants.memory_registrant_repository import InMemoryRegistrantRepository

SCANNER_PASSWORD = "scanner-pass"


class FakeImageStorage:
    def __init__(self):
        self.saved: dict[str, bytes] = {}

    def save(self, key: str, data: bytes, *, content_type: str = "image/png") -> str:
        self.saved[key] = data
        return f"https://cdn.test/{key}"


class FailingImageStorage:
    def save(self, key: str, data: bytes, *, content_type: str = "image/png") -> str:
        raise StorageError(f"upload failed for {key}")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 1, 4, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo() -> InMemoryRegistrantRepository:
    return InMemoryRegistrantRepository()


@pytest.fixture
def storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def make_app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(overrides=None, **container_parts):
        return create_app(overrides, **container_parts)

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def container(app):
    return get_container(app)


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    resp = client.post("/scanner-login", json={"password": SCANNER_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def failing_storage() -> FailingImageStorage:
    return FailingImageStorage()
