"""Application configuration module."""

import os
from datetime import timedelta


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    APP_ENV = os.getenv("APP_ENV", "development")
    EXPOSE_ERROR_DETAILS = APP_ENV != "production"
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///app.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Public links
    BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:5000")
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
    VERIFY_REDIRECT = _env_flag("VERIFY_REDIRECT", "true")

    # Tokens and passwords
    SESSION_TOKEN_TTL = timedelta(days=int(os.getenv("SESSION_TOKEN_TTL_DAYS", "7")))
    RESET_TOKEN_TTL = timedelta(minutes=int(os.getenv("RESET_TOKEN_TTL_MINUTES", "60")))
    VERIFICATION_TOKEN_TTL = timedelta(
        hours=int(os.getenv("VERIFICATION_TOKEN_TTL_HOURS", "24"))
    )
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Email (Brevo transactional API)
    BREVO_API_KEY = os.getenv("BREVO_API_KEY")
    BREVO_API_URL = os.getenv("BREVO_API_URL", "https://api.brevo.com/v3/smtp/email")
    SENDER_EMAIL = os.getenv("SENDER_EMAIL")
    SENDER_NAME = os.getenv("SENDER_NAME", "Our Saladish")
    EMAIL_REQUIRED = _env_flag("EMAIL_REQUIRED")
    EMAIL_ASYNC = _env_flag("EMAIL_ASYNC", "true")
    EMAIL_TIMEOUT_SECONDS = float(os.getenv("EMAIL_TIMEOUT_SECONDS", "10"))

    # Seeding
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@oursaladish.com")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Admin@123")
    ADMIN_NAME = os.getenv("ADMIN_NAME", "Super Admin")
