"""Tests for the Flask application factory."""
from __future__ import annotations

from app import create_app
from notifications import BrevoEmailGateway, ConsoleEmailGateway


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_detailed_health_reports_database(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.get_json()
    assert data["database"] == "Connected"
    assert data["status"] == "Healthy"
    assert data["environment"] == "testing"


def test_root_banner(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Running" in response.get_json()["message"]


def test_blueprints_registered(app):
    """Application factory should register expected blueprints."""
    bps = set(app.blueprints.keys())
    assert {"auth", "menu", "orders", "address", "admin"}.issubset(bps)


def test_injected_gateway_is_used(app, gateway):
    assert app.extensions["notifier"].gateway is gateway
    assert app.extensions["notifier"].required is False


def test_gateway_selected_from_config():
    from conftest import _BaseTestConfig

    class BrevoConfig(_BaseTestConfig):
        BREVO_API_KEY = "xkeysib-test"
        SENDER_EMAIL = "noreply@oursaladish.test"

    assert isinstance(create_app(BrevoConfig).extensions["notifier"].gateway, BrevoEmailGateway)
    assert isinstance(create_app(_BaseTestConfig).extensions["notifier"].gateway, ConsoleEmailGateway)
