"""Application factory."""

import json
import os
import time
import uuid

from flask import Flask, jsonify, g, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from notifications import (
    AbstractEmailGateway,
    BrevoEmailGateway,
    ConsoleEmailGateway,
    Notifier,
)
from routes.admin import admin_bp
from routes.auth import auth_bp
from routes.menu import menu_bp
from routes.orders import address_bp, orders_bp
from services.exceptions import AccountError
from utils.clock import utcnow

migrate = Migrate()
jwt = JWTManager()


def create_app(
    config_class: type[Config] = Config,
    email_gateway: AbstractEmailGateway | None = None,
) -> Flask:
    """Create and configure the Flask application.

    ``email_gateway`` overrides the transport picked from configuration.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.setdefault("STARTED_AT", time.monotonic())

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    )

    # Email
    app.extensions["notifier"] = _build_notifier(app, email_gateway)

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(menu_bp, url_prefix="/api/menu")
    app.register_blueprint(orders_bp, url_prefix="/api/orders")
    app.register_blueprint(address_bp, url_prefix="/api/address")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")

    # Health
    @app.route("/", methods=["GET"])
    def index():
        return jsonify(
            {
                "message": "Our Saladish Backend is Running Successfully!",
                "timestamp": utcnow().isoformat(),
                "version": "1.0.0",
            }
        )

    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    @app.route("/api/health", methods=["GET"])
    def detailed_health():
        try:
            db.session.execute(db.text("SELECT 1"))
            database = "Connected"
        except SQLAlchemyError:
            app.logger.exception("Database health check failed")
            db.session.rollback()
            database = "Disconnected"
        return jsonify(
            {
                "status": "Healthy" if database == "Connected" else "Degraded",
                "timestamp": utcnow().isoformat(),
                "environment": app.config.get("APP_ENV", "development"),
                "database": database,
                "uptime": round(time.monotonic() - app.config["STARTED_AT"], 3),
            }
        )

    # Errors
    _register_error_handlers(app)

    return app


def _build_notifier(app: Flask, email_gateway: AbstractEmailGateway | None) -> Notifier:
    """Pick the email transport from configuration and wrap it in a Notifier."""
    gateway = email_gateway
    if gateway is None:
        api_key = app.config.get("BREVO_API_KEY")
        if api_key:
            gateway = BrevoEmailGateway(
                api_key=api_key,
                sender_email=app.config.get("SENDER_EMAIL"),
                sender_name=app.config.get("SENDER_NAME", "Our Saladish"),
                api_url=app.config.get("BREVO_API_URL"),
                timeout=app.config.get("EMAIL_TIMEOUT_SECONDS", 10),
            )
        else:
            app.logger.warning("BREVO_API_KEY is not set; emails will only be logged")
            gateway = ConsoleEmailGateway()

    return Notifier(
        gateway,
        required=bool(app.config.get("EMAIL_REQUIRED")),
        background=bool(app.config.get("EMAIL_ASYNC", True)),
    )


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(AccountError)
    def _handle_account_error(error: AccountError):
        request_id = g.get("request_id") or str(uuid.uuid4())
        if error.status_code >= 500:
            app.logger.error("Account operation failed: %s", error.code)
        payload = error.to_dict()
        payload["request_id"] = request_id
        response = jsonify(payload)
        response.status_code = int(error.status_code)
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        detail = "An unexpected error occurred."
        if app.config.get("EXPOSE_ERROR_DETAILS"):
            detail = str(error) or detail
        payload = {
            "error": "Internal Server Error",
            "detail": detail,
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
