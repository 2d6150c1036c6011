"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402
from notifications.abstract_gateway import AbstractEmailGateway, SendResult  # noqa: E402
from services.tokens import SESSION_PURPOSE, issue_signed  # noqa: E402

LINK_TOKEN = re.compile(r"/(?:verify|reset-password)/([^\"'\s<]+)")


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hs256"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    BACKEND_URL = "http://api.test"
    FRONTEND_URL = "http://shop.test"
    VERIFY_REDIRECT = False
    EMAIL_REQUIRED = False
    EMAIL_ASYNC = False
    BREVO_API_KEY = None
    CORS_ORIGINS = "*"
    APP_ENV = "testing"
    EXPOSE_ERROR_DETAILS = True


class RecordingGateway(AbstractEmailGateway):
    """Email gateway that keeps every message in memory."""

    def __init__(self):
        self.sent: list[dict] = []
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> SendResult:
        if self.fail:
            return SendResult(delivered=False, error="simulated outage")
        self.sent.append({"to": to, "subject": subject, "html": html})
        return SendResult(delivered=True, message_id=f"msg-{len(self.sent)}")

    def last_token(self, to: str | None = None) -> str:
        messages = [m for m in self.sent if to is None or m["to"] == to]
        assert messages, "no email was sent"
        match = LINK_TOKEN.search(messages[-1]["html"])
        assert match, "email does not contain a token link"
        return match.group(1)


@pytest.fixture()
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture()
def make_app(gateway):
    """Build an application with per-test configuration overrides."""

    created: list[Flask] = []

    def _make(**overrides) -> Flask:
        class TestConfig(_BaseTestConfig):
            pass

        for key, value in overrides.items():
            setattr(TestConfig, key, value)

        application = create_app(TestConfig, email_gateway=gateway)
        with application.app_context():
            db.create_all()
        created.append(application)
        return application

    yield _make

    for application in created:
        with application.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def app(make_app) -> Flask:
    """Create a Flask application instance for tests."""

    return make_app()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


def create_user(
    email: str,
    password: str,
    *,
    name: str = "Test User",
    role: str = "user",
    verified: bool = True,
) -> int:
    """Persist a user directly and return its id. Needs an app context."""

    user = User(
        name=name,
        email=email,
        role=role,
        verification_status="verified" if verified else "unverified",
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user.id


def session_headers(app: Flask, user_id: int, role: str = "user") -> dict[str, str]:
    with app.app_context():
        token = issue_signed(
            user_id,
            app.config["SESSION_TOKEN_TTL"],
            purpose=SESSION_PURPOSE,
            claims={"role": role},
        )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(app: Flask) -> dict[str, str]:
    with app.app_context():
        admin_id = create_user("admin@example.com", "AdminPass123", role="admin")
    return session_headers(app, admin_id, role="admin")
