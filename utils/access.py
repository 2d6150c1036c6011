"""Bearer-token authentication and composable authorization predicates."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable

from flask import g, request
from werkzeug.exceptions import Forbidden, Unauthorized

from services.exceptions import InvalidOrExpiredToken
from services.tokens import SESSION_PURPOSE, verify_signed


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a session token."""

    user_id: int
    role: str

    def to_dict(self) -> dict:
        return {"id": self.user_id, "role": self.role}


Predicate = Callable[[Identity], bool]


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate_request() -> Identity:
    """Validate the request's bearer token and attach the identity to ``g``.

    Raises:
        Unauthorized: No bearer token was supplied.
        Forbidden: The token is invalid, expired, or not a session token.
    """

    token = _bearer_token()
    if token is None:
        raise Unauthorized("No token provided.")

    try:
        claims = verify_signed(token, purpose=SESSION_PURPOSE)
        identity = Identity(user_id=int(claims["sub"]), role=claims.get("role") or "user")
    except (InvalidOrExpiredToken, KeyError, TypeError, ValueError) as exc:
        raise Forbidden("Invalid or expired token.") from exc

    g.identity = identity
    return identity


def current_identity() -> Identity | None:
    return g.get("identity")


def is_admin(identity: Identity) -> bool:
    return identity.role == "admin"


is_admin.denied_message = "Admin privileges required."


def requires(*predicates: Predicate):
    """Authenticate the request, then require every predicate to hold."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = authenticate_request()
            for predicate in predicates:
                if not predicate(identity):
                    raise Forbidden(getattr(predicate, "denied_message", "Access denied."))
            return view(*args, **kwargs)

        return wrapper

    return decorator
