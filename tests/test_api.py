"""Tests for the HTTP request layer."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from whatsapp_otp.channels.console import ConsoleChannel
from whatsapp_otp.config import Settings
from whatsapp_otp.errors import DeliveryError
from whatsapp_otp.main import create_app


@pytest.fixture
def channel():
    return ConsoleChannel()


@pytest.fixture
def client(channel):
    app = create_app(Settings(expose_otp_code=True), channel=channel)
    with TestClient(app) as test_client:
        yield test_client


def _send(client, phone="254700000000", **extra):
    return client.post("/send-otp", json={"phone": phone, **extra})


# ──────────────────────────────────────────────────────────
# POST /send-otp
# ──────────────────────────────────────────────────────────
def test_send_otp_returns_code_when_exposed(client, channel):
    resp = _send(client, custom_message="Code: {otp}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["expires_in_seconds"] == 300
    assert channel.sent[-1] == ("254700000000", f"Code: {data['otp']}")


def test_send_otp_hides_code_by_default(channel):
    app = create_app(Settings(expose_otp_code=False), channel=channel)
    with TestClient(app) as client:
        resp = _send(client)
    assert resp.status_code == 200
    assert "otp" not in resp.json()


def test_send_otp_channel_not_ready(client, channel):
    channel.ready = False
    resp = _send(client)
    assert resp.status_code == 503
    assert resp.json()["error"] == "ChannelNotReady"


def test_send_otp_delivery_failed(client, channel):
    channel.deliver = AsyncMock(side_effect=DeliveryError("timeout"))
    resp = _send(client)
    assert resp.status_code == 502
    data = resp.json()
    assert data["success"] is False
    assert data["error"] == "DeliveryFailed"
    assert data["fallback"].startswith("https://wa.me/254700000000")


def test_send_otp_requires_phone(client):
    assert client.post("/send-otp", json={}).status_code == 422
    assert client.post("/send-otp", json={"phone": ""}).status_code == 422


# ──────────────────────────────────────────────────────────
# POST /verify-otp
# ──────────────────────────────────────────────────────────
def test_verify_success_then_not_found(client):
    code = _send(client).json()["otp"]

    resp = client.post("/verify-otp", json={"phone": "254700000000", "otp": code})
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    resp = client.post("/verify-otp", json={"phone": "254700000000", "otp": code})
    assert resp.status_code == 404
    assert resp.json()["error"] == "NotFoundOrExpired"


def test_verify_wrong_code_then_lockout(client):
    code = _send(client, phone="111").json()["otp"]
    wrong = "000000" if code != "000000" else "999999"

    for expected in (4, 3, 2, 1, 0):
        resp = client.post("/verify-otp", json={"phone": "111", "otp": wrong})
        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidCode"
        assert resp.json()["attempts_remaining"] == expected

    resp = client.post("/verify-otp", json={"phone": "111", "otp": wrong})
    assert resp.status_code == 429
    assert resp.json()["error"] == "TooManyAttempts"


# ──────────────────────────────────────────────────────────
# GET /status, /health
# ──────────────────────────────────────────────────────────
def test_status_reports_live_codes(client, channel):
    _send(client, phone="aaa")
    _send(client, phone="bbb")

    data = client.get("/status").json()
    assert data["channel"] == "console"
    assert data["channel_ready"] is True
    assert data["active_otps"] == 2

    channel.ready = False
    assert client.get("/status").json()["status"] == "channel_not_ready"


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
