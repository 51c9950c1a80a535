"""Login throttling domain service."""

from datetime import datetime, timedelta

import logfire

from diary.config import AuthSettings
from diary.domain.error import AuthenticationError
from diary.domain.model import User
from diary.domain.model.user import utcnow

from .base import Service
from .password_service import PasswordService
from .user_service import UserService


class LoginGuard(Service):
    """Authenticates email/password logins and locks out brute force attempts.

    A lock is checked before the password is compared, so a locked account
    is rejected even with the right password. Every mismatch is counted
    atomically; reaching the threshold locks the account for a fixed window.
    Locked accounts fail with the same error as wrong credentials.
    """

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize login guard.

        Args:
            user_service: User domain service
            password_service: Password hashing service
            auth_settings: Authentication settings (threshold, lock duration)
        """
        self.user_service = user_service
        self.password_service = password_service
        self.auth_settings = auth_settings

    def clear_expired_lock(self, user: User, now: datetime) -> User:
        """Reset lock state once the lock window has passed."""
        if user.is_locked and not user.lock_active(now):
            return user.model_copy(
                update={"is_locked": False, "lock_until": None, "login_attempts": 0}
            )
        return user

    def register_failure(self, user: User, now: datetime) -> User:
        """Count a failed attempt, locking the account at the threshold."""
        user = self.clear_expired_lock(user, now)
        attempts = user.login_attempts + 1
        update: dict = {"login_attempts": attempts}
        if attempts >= self.auth_settings.max_login_attempts:
            update["is_locked"] = True
            update["lock_until"] = now + timedelta(
                minutes=self.auth_settings.lockout_minutes
            )
        return user.model_copy(update=update)

    def register_success(self, user: User, now: datetime) -> User:
        """Clear failure counters and record the login time."""
        return user.model_copy(
            update={
                "login_attempts": 0,
                "is_locked": False,
                "lock_until": None,
                "last_login_at": now,
            }
        )

    async def authenticate(self, email: str, password: str) -> User:
        """Authenticate an email/password login.

        Args:
            email: Normalized email
            password: Plaintext password

        Returns:
            The logged-in user, with counters cleared and last login updated

        Raises:
            AuthenticationError: ``invalid_credentials`` for unknown email,
                wrong password or an active lock; ``use_oauth`` for accounts
                without the email method; ``requires_verification`` when the
                password matched but the email is not verified
        """
        with logfire.span("login_guard.authenticate"):
            now = utcnow()
            user = await self.user_service.get_user_by_email(email)
            if not user:
                logfire.info("Login for unknown email")
                raise AuthenticationError("Invalid credentials")

            if user.lock_active(now):
                logfire.warn("Login rejected, account locked", user_id=str(user.id))
                raise AuthenticationError("Invalid credentials")

            if user.is_oauth_only:
                raise AuthenticationError(
                    "This account uses social login. Please sign in with Google or Apple",
                    reason=AuthenticationError.USE_OAUTH,
                    requires_password_setup=True,
                )

            matches = self.password_service.verify(password, user.password_hash)

            if matches and not user.is_email_verified:
                raise AuthenticationError(
                    "Please verify your email first",
                    reason=AuthenticationError.REQUIRES_VERIFICATION,
                    requires_verification=True,
                )

            locked_meanwhile = False

            def apply(current: User) -> User:
                nonlocal locked_meanwhile
                if current.lock_active(now):
                    locked_meanwhile = True
                    return current
                if not matches:
                    return self.register_failure(current, now)
                return self.register_success(current, now)

            updated = await self.user_service.update(user.id, apply)

            if locked_meanwhile or not matches:
                logfire.warn(
                    "Login failed",
                    user_id=str(user.id),
                    login_attempts=updated.login_attempts,
                    is_locked=updated.is_locked,
                )
                raise AuthenticationError("Invalid credentials")

            logfire.info("User logged in", user_id=str(user.id))
            return updated
