"""One-time passcode domain service."""

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

import logfire

from diary.config import AuthSettings
from diary.domain.error import (
    NoOtpPending,
    OtpError,
    OtpExpired,
    OtpMismatch,
    TooManyOtpAttempts,
)
from diary.domain.model import User
from diary.domain.value import AuthMethod

from .base import Service


@dataclass(frozen=True)
class OtpCheck:
    """Result of checking a passcode.

    ``user`` is the state to persist whether or not the check passed,
    so failed attempts are recorded before ``error`` is raised.
    """

    user: User
    error: OtpError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class OtpService(Service):
    """Issues and checks numeric email passcodes.

    Only a SHA-256 digest of the passcode is stored on the user.
    Both operations are pure: they return the new user state and leave
    persistence to the caller.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize OTP service.

        Args:
            auth_settings: Authentication settings (length, TTL, attempt budget)
        """
        self.auth_settings = auth_settings

    def generate_code(self) -> str:
        """Generate a uniformly random, zero-padded numeric code."""
        length = self.auth_settings.otp_length
        return f"{secrets.randbelow(10**length):0{length}d}"

    @staticmethod
    def hash_code(code: str) -> str:
        return hashlib.sha256(code.encode("utf-8")).hexdigest()

    def issue(self, user: User, now: datetime) -> tuple[User, str]:
        """Issue a new passcode, replacing any pending one.

        Args:
            user: User to issue the code for
            now: Current time

        Returns:
            Tuple of (updated user, plaintext code to deliver)
        """
        code = self.generate_code()
        updated = user.model_copy(
            update={
                "email_otp_hash": self.hash_code(code),
                "email_otp_expires_at": now
                + timedelta(minutes=self.auth_settings.otp_ttl_minutes),
                "otp_attempts": 0,
            }
        )
        logfire.info("OTP issued", user_id=str(user.id))
        return updated, code

    def verify(self, user: User, code: str, now: datetime) -> OtpCheck:
        """Check a submitted passcode.

        Checks run in order: pending, expiry, attempt budget, match.
        A mismatch consumes one attempt. Success clears the code, marks the
        email verified and, when a password was waiting to be linked to an
        OAuth account, adds the email method.

        Args:
            user: Current user state
            code: Submitted code
            now: Current time

        Returns:
            OtpCheck with the state to persist and the failure, if any
        """
        max_attempts = self.auth_settings.otp_max_attempts

        if not user.email_otp_hash:
            return OtpCheck(user, NoOtpPending())

        if user.email_otp_expires_at is None or now > user.email_otp_expires_at:
            return OtpCheck(user, OtpExpired())

        if user.otp_attempts >= max_attempts:
            return OtpCheck(user, TooManyOtpAttempts())

        if not hmac.compare_digest(self.hash_code(code.strip()), user.email_otp_hash):
            attempts = user.otp_attempts + 1
            logfire.warn("OTP mismatch", user_id=str(user.id), attempts=attempts)
            return OtpCheck(
                user.model_copy(update={"otp_attempts": attempts}),
                OtpMismatch(attempts_remaining=max_attempts - attempts),
            )

        methods = user.auth_methods
        if user.password_link_pending:
            methods = methods | {AuthMethod.EMAIL}

        return OtpCheck(
            user.model_copy(
                update={
                    "is_email_verified": True,
                    "email_otp_hash": None,
                    "email_otp_expires_at": None,
                    "otp_attempts": 0,
                    "auth_methods": methods,
                }
            )
        )
