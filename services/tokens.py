"""Token issuing and verification.

Two kinds of tokens exist:

- signed tokens (JWT, HS256) for sessions and password resets, validated by
  signature and expiry alone;
- opaque verification tokens, persisted on the user and matched by equality.
"""

from __future__ import annotations

import secrets
from datetime import timedelta

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from services.exceptions import InvalidOrExpiredToken

SESSION_PURPOSE = "session"
RESET_PURPOSE = "reset"
PURPOSE_CLAIM = "purpose"
VERIFICATION_TOKEN_BYTES = 32


def issue_signed(
    subject: str | int,
    ttl: timedelta,
    *,
    purpose: str,
    claims: dict | None = None,
) -> str:
    """Return a signed token for ``subject`` that expires after ``ttl``."""

    additional_claims = dict(claims or {})
    additional_claims[PURPOSE_CLAIM] = purpose
    return create_access_token(
        identity=str(subject),
        expires_delta=ttl,
        additional_claims=additional_claims,
    )


def verify_signed(token: str | None, *, purpose: str) -> dict:
    """Decode ``token`` and return its claims.

    Raises:
        InvalidOrExpiredToken: bad signature, expired, malformed, or issued
            for a different purpose.
    """

    if not token:
        raise InvalidOrExpiredToken()
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as exc:
        raise InvalidOrExpiredToken() from exc

    if claims.get(PURPOSE_CLAIM) != purpose:
        raise InvalidOrExpiredToken()
    return claims


def issue_opaque_verification_token() -> str:
    """Return a high-entropy random token with no decodable structure."""

    return secrets.token_hex(VERIFICATION_TOKEN_BYTES)
