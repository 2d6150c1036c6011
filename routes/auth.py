"""Authentication blueprint: registration, email verification, login and password reset."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, redirect, request

from services.accounts import get_account_service
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user and send the verification email."""
    payload = parse_json_request(request)
    result = get_account_service().register(
        payload.get("name"), payload.get("email"), payload.get("password")
    )
    current_app.logger.info("Registration accepted for user %s", result.user_id)

    return (
        jsonify({"message": "Registration successful! Please check your email to confirm."}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/verify/<token>", methods=["GET"])
def verify_email(token: str):
    """Confirm an email address from the link sent at registration."""
    get_account_service().verify_email(token)

    if current_app.config.get("VERIFY_REDIRECT"):
        frontend_url = current_app.config["FRONTEND_URL"].rstrip("/")
        return redirect(f"{frontend_url}/login?verified=true")
    return jsonify({"message": "Email verified successfully."}), HTTPStatus.OK


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a verified user and return a session token."""
    payload = parse_json_request(request)
    result = get_account_service().login(payload.get("email"), payload.get("password"))

    return jsonify({"user": result.user, "token": result.token}), HTTPStatus.OK


@auth_bp.route("/forgot-password", methods=["POST"])
def forgot_password() -> tuple:
    payload = parse_json_request(request)
    get_account_service().forgot_password(payload.get("email"))

    return jsonify({"message": "Password reset link sent to your email!"}), HTTPStatus.OK


@auth_bp.route("/reset-password/<token>", methods=["GET"])
def check_reset_token(token: str) -> tuple:
    """Report whether a reset token is still usable, without consuming it."""
    status = get_account_service().verify_reset_token(token)

    return (
        jsonify(
            {
                "valid": True,
                "email": status.email,
                "expires_at": status.expires_at.isoformat(),
            }
        ),
        HTTPStatus.OK,
    )


@auth_bp.route("/reset-password/<token>", methods=["POST"])
def reset_password(token: str) -> tuple:
    payload = parse_json_request(request)
    get_account_service().reset_password(token, payload.get("password"))

    return jsonify({"message": "Password updated successfully!"}), HTTPStatus.OK
