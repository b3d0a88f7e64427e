"""
Tests for app-level wiring: health checks, middleware and fallback errors.
"""

from fastapi import Request

from backend.app.error_handlers import request_id_for
from devconnector.logging import bind_context, clear_context


def test_health(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_readiness_checks_database(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health/ready")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ready", "checks": {"database": True}}


def test_request_id_is_echoed(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert resp.headers["x-request-id"] == "abc-123"


def test_unsafe_request_id_is_replaced(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health", headers={"X-Request-ID": "bad id!"})

    request_id = resp.headers["x-request-id"]
    assert request_id != "bad id!"
    assert len(request_id) == 32


def test_security_headers(test_app_client):
    client, _ = test_app_client

    resp = client.get("/health")

    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "Content-Security-Policy" in resp.headers
    # Only sent in production
    assert "Strict-Transport-Security" not in resp.headers


def test_unknown_route_uses_msg_payload(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.json() == {"msg": "Not Found"}


def test_oversized_body_is_rejected(test_app_client):
    client, _ = test_app_client

    resp = client.post(
        "/api/v1/users",
        content=b"x" * (1024 * 1024 + 1),
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 413


def test_error_log_request_id_survives_cleared_context():
    bind_context(request_id="bound-id")
    clear_context()
    request = Request({"type": "http", "headers": [], "state": {"request_id": "abc-123"}})

    assert request_id_for(request) == "abc-123"


def test_error_log_request_id_falls_back_to_context():
    bind_context(request_id="bound-id")
    try:
        assert request_id_for(Request({"type": "http", "headers": []})) == "bound-id"
    finally:
        clear_context()


def test_request_id_is_stored_on_request_state(test_app_client):
    client, _ = test_app_client
    seen = {}

    @client.app.get("/_state-check")
    def state_check(request: Request):
        seen["request_id"] = request.state.request_id
        return {}

    client.get("/_state-check", headers={"X-Request-ID": "abc-123"})

    assert seen == {"request_id": "abc-123"}
