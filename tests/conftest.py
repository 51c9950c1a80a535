"""Test configuration and fixtures."""

import os
import re
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from diary.adapter.email.smtp import MockEmailClient
from diary.domain.model import User
from diary.domain.value import AuthMethod, UserId

# Fast bcrypt and test-mode settings for every container built in tests
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")

logfire.configure(send_to_logfire=False, console=False)

# Satisfies the password policy
PASSWORD = "Password1"


def make_user(
    email: str = "alice@example.com",
    methods: set[AuthMethod] | None = None,
    **fields,
) -> User:
    """Helper building a user with sensible defaults for tests.

    Args:
        email: User email
        methods: Auth methods (defaults to EMAIL)
        **fields: Any other User field

    Returns:
        User that has not been stored anywhere
    """
    now = datetime.now(timezone.utc)
    return User(
        id=UserId(uuid4()),
        email=email,
        name=fields.pop("name", "Alice"),
        auth_methods=frozenset(methods or {AuthMethod.EMAIL}),
        created_at=now,
        updated_at=now,
        **fields,
    )


def sent_otp(email_client: MockEmailClient, to: str) -> str:
    """Extract the last verification code emailed to an address."""
    message = email_client.last_to(to)
    assert message is not None, f"No email sent to {to}"
    match = re.search(r"code is (\d+)", message.text)
    assert match, "Email did not contain a verification code"
    return match.group(1)
