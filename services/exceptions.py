"""Typed exceptions for account lifecycle failures."""

from http import HTTPStatus


class AccountError(Exception):
    """Base class for failures surfaced to API clients.

    Each subclass carries a stable ``code`` and ``message`` that the HTTP
    layer returns verbatim.
    """

    status_code = HTTPStatus.BAD_REQUEST
    code = "account_error"
    message = "Request could not be completed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationError(AccountError):
    """Missing or malformed input."""

    code = "validation_error"
    message = "All fields are required"


class DuplicateAccount(AccountError):
    """A user with this email already exists."""

    code = "duplicate_account"
    message = "User already exists"


class UserNotFound(AccountError):
    code = "user_not_found"
    message = "User not found"


class NotVerified(AccountError):
    """The account exists but the email address was never confirmed."""

    code = "not_verified"
    message = "Please confirm your email first"


class InvalidCredentials(AccountError):
    code = "invalid_credentials"
    message = "Invalid credentials"


class InvalidOrExpiredToken(AccountError):
    """
    Token is malformed, tampered with, expired, or already consumed.

    Used for verification, reset and session tokens alike.
    """

    code = "invalid_or_expired_token"
    message = "Invalid or expired token"


class AlreadyVerified(AccountError):
    code = "already_verified"
    message = "Email already verified"


class NotificationFailure(AccountError):
    """Email delivery failed while delivery was configured as mandatory."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "notification_failure"
    message = "Email sending failed"
