"""User aggregate root.

A user can sign in with an email/password pair, Google, Apple, or any
combination of them. ``auth_methods`` records which of these the account
has proven; provider ids and the password hash are the credentials
backing them.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from diary.domain.model.common import DomainModel
from diary.domain.value import AuthMethod, UserId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User aggregate root - provider-agnostic."""

    id: UserId
    email: str
    name: str = Field(min_length=1, max_length=100)
    avatar_url: Optional[str] = None

    # Credentials
    password_hash: Optional[str] = None
    google_id: Optional[str] = None
    apple_id: Optional[str] = None
    auth_methods: frozenset[AuthMethod] = Field(min_length=1)

    # Email verification
    is_email_verified: bool = False
    email_otp_hash: Optional[str] = None
    email_otp_expires_at: Optional[datetime] = None
    otp_attempts: int = Field(default=0, ge=0)

    # Password recovery
    password_reset_token_hash: Optional[str] = None
    password_reset_expires_at: Optional[datetime] = None

    # Login throttling
    login_attempts: int = Field(default=0, ge=0)
    is_locked: bool = False
    lock_until: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    is_premium: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are stored lower-cased and trimmed."""
        return v.strip().lower()

    def has_method(self, method: AuthMethod) -> bool:
        return method in self.auth_methods

    @property
    def is_oauth_only(self) -> bool:
        """True when the account cannot sign in with a password yet."""
        return AuthMethod.EMAIL not in self.auth_methods

    @property
    def password_link_pending(self) -> bool:
        """True when a password was set on an OAuth account but not yet confirmed."""
        return self.password_hash is not None and self.is_oauth_only

    def lock_active(self, now: datetime) -> bool:
        """Whether the account is currently locked out of password login."""
        return (
            self.is_locked and self.lock_until is not None and now < self.lock_until
        )
