"""Account lifecycle: register, verify email, login, forgot and reset password."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from flask import current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import db
from models.user import User
from notifications.notifier import Notifier
from notifications.templates import (
    RESET_SUBJECT,
    VERIFY_SUBJECT,
    reset_email,
    verification_email,
)
from services.exceptions import (
    AlreadyVerified,
    DuplicateAccount,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotificationFailure,
    NotVerified,
    UserNotFound,
    ValidationError,
)
from services.tokens import (
    RESET_PURPOSE,
    SESSION_PURPOSE,
    issue_opaque_verification_token,
    issue_signed,
    verify_signed,
)
from utils.clock import utcnow

logger = logging.getLogger(__name__)

PASSWORD_VERSION_CLAIM = "pwv"
ROLE_CLAIM = "role"


def _text(value, message: str | None = None) -> str:
    """Return ``value`` stripped, rejecting anything that is not a string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(message)
    return value.strip()


@dataclass(frozen=True)
class AccountSettings:
    """Link targets and token lifetimes used by the lifecycle."""

    backend_url: str
    frontend_url: str
    session_ttl: timedelta = timedelta(days=7)
    reset_ttl: timedelta = timedelta(hours=1)
    verification_ttl: timedelta | None = timedelta(hours=24)

    @classmethod
    def from_config(cls, config) -> "AccountSettings":
        return cls(
            backend_url=config["BACKEND_URL"].rstrip("/"),
            frontend_url=config["FRONTEND_URL"].rstrip("/"),
            session_ttl=config["SESSION_TOKEN_TTL"],
            reset_ttl=config["RESET_TOKEN_TTL"],
            verification_ttl=config.get("VERIFICATION_TOKEN_TTL"),
        )


@dataclass(frozen=True)
class RegistrationResult:
    user_id: int
    email: str
    verification_pending: bool = True


@dataclass(frozen=True)
class VerificationResult:
    user_id: int
    email: str


@dataclass(frozen=True)
class LoginResult:
    user: dict
    token: str


@dataclass(frozen=True)
class ResetTokenStatus:
    user_id: int
    email: str
    expires_at: datetime


class AccountService:
    """Orchestrates the account lifecycle against the user store.

    Handles:
    - Registration with email verification
    - One-shot email verification
    - Login for verified users
    - Forgot/reset password with single-use reset tokens
    """

    def __init__(self, session: Session, notifier: Notifier, settings: AccountSettings):
        self._session = session
        self._notifier = notifier
        self._settings = settings

    def _find_by_email(self, email: str) -> User | None:
        return self._session.query(User).filter_by(email=email).first()

    def register(self, name: str | None, email: str | None, password: str | None) -> RegistrationResult:
        """Create an unverified user and send the verification email.

        Raises:
            ValidationError: If any field is empty.
            DuplicateAccount: If the email is already registered.
            NotificationFailure: If email delivery is mandatory and failed;
                the user is not created in that case.
        """
        name = _text(name)
        email = _text(email)
        if password is not None and not isinstance(password, str):
            raise ValidationError()
        if not name or not email or not password:
            raise ValidationError()

        if self._find_by_email(email) is not None:
            raise DuplicateAccount()

        token = issue_opaque_verification_token()
        expires_at = (
            utcnow() + self._settings.verification_ttl
            if self._settings.verification_ttl
            else None
        )
        user = User(name=name, email=email, role="user", verification_status="unverified")
        user.set_password(password)
        user.issue_verification_token(token, expires_at)
        self._session.add(user)
        try:
            self._session.flush()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration for the same email.
            self._session.rollback()
            raise DuplicateAccount() from exc

        verify_link = f"{self._settings.backend_url}/api/verify/{token}"
        html = verification_email(name, verify_link)

        if self._notifier.required:
            try:
                self._notifier.notify(email, VERIFY_SUBJECT, html)
            except NotificationFailure:
                self._session.rollback()
                raise
            self._session.commit()
        else:
            self._session.commit()
            self._notifier.notify(email, VERIFY_SUBJECT, html)

        logger.info("Registered user %s, verification pending", user.id)
        return RegistrationResult(user_id=user.id, email=user.email)

    def verify_email(self, token: str | None) -> VerificationResult:
        """Consume a verification token and mark its user verified."""
        token = (token or "").strip()
        if not token:
            raise InvalidOrExpiredToken()

        user = self._session.query(User).filter_by(verification_token=token).first()
        if user is None:
            raise InvalidOrExpiredToken()
        if user.is_verified:
            raise AlreadyVerified()
        if user.verification_token_expired():
            raise InvalidOrExpiredToken()

        user.mark_verified()
        self._session.commit()
        logger.info("Verified email for user %s", user.id)
        return VerificationResult(user_id=user.id, email=user.email)

    def login(self, email: str | None, password: str | None) -> LoginResult:
        email = _text(email, "Email and password are required")
        if password is not None and not isinstance(password, str):
            raise ValidationError("Email and password are required")
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._find_by_email(email)
        if user is None:
            raise UserNotFound()
        if not user.is_verified:
            raise NotVerified()
        if not user.check_password(password):
            logger.warning("Failed login for user %s", user.id)
            raise InvalidCredentials()

        token = issue_signed(
            user.id,
            self._settings.session_ttl,
            purpose=SESSION_PURPOSE,
            claims={ROLE_CLAIM: user.role},
        )
        return LoginResult(user=user.to_summary(), token=token)

    def forgot_password(self, email: str | None) -> None:
        """Email a short-lived reset link. Does not modify the user."""
        email = _text(email, "Email is required")
        if not email:
            raise ValidationError("Email is required")

        user = self._find_by_email(email)
        if user is None:
            raise UserNotFound()

        token = issue_signed(
            user.id,
            self._settings.reset_ttl,
            purpose=RESET_PURPOSE,
            claims={PASSWORD_VERSION_CLAIM: user.password_version},
        )
        reset_link = f"{self._settings.frontend_url}/reset-password/{token}"
        ttl_minutes = int(self._settings.reset_ttl.total_seconds() // 60)
        self._notifier.notify(user.email, RESET_SUBJECT, reset_email(reset_link, ttl_minutes))
        logger.info("Password reset requested for user %s", user.id)

    def _resolve_reset_token(self, token: str | None) -> tuple[User, dict]:
        claims = verify_signed(token, purpose=RESET_PURPOSE)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidOrExpiredToken() from exc

        user = self._session.get(User, user_id)
        if user is None:
            raise InvalidOrExpiredToken()
        # A reset bumps password_version, which retires every earlier reset token.
        if claims.get(PASSWORD_VERSION_CLAIM) != user.password_version:
            raise InvalidOrExpiredToken()
        return user, claims

    def verify_reset_token(self, token: str | None) -> ResetTokenStatus:
        """Check a reset token without consuming it."""
        user, claims = self._resolve_reset_token(token)
        return ResetTokenStatus(
            user_id=user.id,
            email=user.email,
            expires_at=datetime.fromtimestamp(claims["exp"], UTC).replace(tzinfo=None),
        )

    def reset_password(self, token: str | None, new_password: str | None) -> None:
        user, _ = self._resolve_reset_token(token)
        if not new_password or not isinstance(new_password, str):
            raise ValidationError("Password is required")

        user.set_password(new_password)
        user.password_version = (user.password_version or 0) + 1
        self._session.commit()
        logger.info("Password reset for user %s", user.id)


def get_account_service() -> AccountService:
    """Build an ``AccountService`` bound to the current application."""

    return AccountService(
        db.session,
        current_app.extensions["notifier"],
        AccountSettings.from_config(current_app.config),
    )
