"""Integration tests: health endpoints and response middleware."""
from unittest.mock import patch

from fastapi.testclient import TestClient


def test_health_ok(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_health_live(client: TestClient):
    r = client.get("/health/live")
    assert r.status_code == 200
    data = r.json()
    assert data.get("status") == "ok" and data.get("check") == "live"


def test_health_ready_with_reachable_db(healthy_db_client: TestClient):
    r = healthy_db_client.get("/health/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "check": "ready", "database": "up"}


def test_health_ready_degraded_when_db_down(healthy_db_client: TestClient):
    with patch("app.core.health.db.ping", return_value=False):
        r = healthy_db_client.get("/health/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "degraded"
    assert r.json()["database"] == "down"


def test_request_id_generated(client: TestClient):
    r = client.get("/health")
    assert r.headers.get("x-request-id")
    assert r.headers.get("x-content-type-options") == "nosniff"


def test_request_id_echoed(client: TestClient):
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers.get("x-request-id") == "abc-123"


def test_health_ready_follows_current_ping(healthy_db_client: TestClient):
    """Readiness is decided per call, so it recovers after the database comes back."""
    with patch("app.core.health.db.ping", return_value=False):
        assert healthy_db_client.get("/health/ready").json()["database"] == "down"
    with patch("app.core.health.db.ping", return_value=True):
        assert healthy_db_client.get("/health/ready").json()["database"] == "up"
