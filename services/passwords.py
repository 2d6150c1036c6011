"""Password hashing helpers."""

from __future__ import annotations

from flask import current_app, has_app_context
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "scrypt"


def _configured_method() -> str:
    if has_app_context():
        return current_app.config.get("PASSWORD_HASH_METHOD") or DEFAULT_HASH_METHOD
    return DEFAULT_HASH_METHOD


def hash_password(password: str, method: str | None = None) -> str:
    """Return a salted hash of ``password``.

    The method and its work factor are embedded in the returned string, so
    hashes produced under an older configuration keep verifying.
    """

    return generate_password_hash(password, method=method or _configured_method())


def verify_password(password: str, hashed: str | None) -> bool:
    if not hashed or not isinstance(password, str):
        return False
    return check_password_hash(hashed, password)
