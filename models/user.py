"""User model definition."""

from datetime import datetime
from typing import Optional

from services.passwords import hash_password, verify_password
from utils.clock import utcnow

from . import db


class User(db.Model):
    """Represents a registered customer or administrator."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(32), nullable=False, default="user")
    verification_status = db.Column(
        db.String(32),
        nullable=False,
        default="unverified",
        server_default=db.text("'unverified'"),
    )
    verification_token = db.Column(db.String(128), unique=True, nullable=True)
    verification_token_expires_at = db.Column(db.DateTime, nullable=True)
    password_version = db.Column(
        db.Integer, nullable=False, default=0, server_default=db.text("0")
    )
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def set_password(self, password: str, method: Optional[str] = None) -> None:
        """Hash and store the password, replacing any previous hash."""

        self.password_hash = hash_password(password, method=method)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    @property
    def is_verified(self) -> bool:
        return self.verification_status == "verified"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def issue_verification_token(self, token: str, expires_at: Optional[datetime]) -> None:
        """Attach a pending email verification token."""

        self.verification_token = token
        self.verification_token_expires_at = expires_at

    def verification_token_expired(self, now: Optional[datetime] = None) -> bool:
        if self.verification_token_expires_at is None:
            return False
        return self.verification_token_expires_at < (now or utcnow())

    def mark_verified(self) -> None:
        """Mark the email as verified and consume the verification token."""

        self.verification_status = "verified"
        self.verification_token = None
        self.verification_token_expires_at = None

    def to_summary(self) -> dict:
        """Serialize the non-sensitive parts of the user."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "is_verified": self.is_verified,
            "role": self.role,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
