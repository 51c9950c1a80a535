"""Shared request/response models for authentication use cases."""

import re
from datetime import datetime

from pydantic import BaseModel

from diary.domain.model import User
from diary.domain.service import PasswordService
from diary.domain.value import AuthMethod

_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def validate_password_strength(password: str) -> str:
    """Password policy for passwords chosen by the user.

    At least 8 characters with an upper-case letter, a lower-case letter
    and a digit, and never something that would be stored as an existing
    hash. Raises ValueError so it can back pydantic validators.
    """
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes")
    if PasswordService.is_hash(password):
        raise ValueError("Password must not be a password hash")
    if not _PASSWORD_RE.match(password):
        raise ValueError(
            "Password must contain at least one uppercase letter, "
            "one lowercase letter, and one number"
        )
    return password


class UserInfo(BaseModel):
    """Public view of a user."""

    id: str
    name: str
    email: str
    avatar_url: str | None
    auth_methods: list[AuthMethod]
    is_email_verified: bool
    is_premium: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            avatar_url=user.avatar_url,
            auth_methods=sorted(user.auth_methods, key=lambda m: m.value),
            is_email_verified=user.is_email_verified,
            is_premium=user.is_premium,
            created_at=user.created_at,
        )


class AuthTokenResponse(BaseModel):
    """Session token plus the signed-in user."""

    token: str
    user: UserInfo


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
