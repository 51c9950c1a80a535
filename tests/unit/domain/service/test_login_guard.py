"""Unit tests for LoginGuard."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from diary.config import AuthSettings
from diary.domain.error import AuthenticationError
from diary.domain.service import LoginGuard, PasswordService, UserService
from diary.domain.value import AuthMethod
from diary.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import PASSWORD, make_user


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(bcrypt_rounds=4, max_login_attempts=5, lockout_minutes=30)


@pytest.fixture
def user_service() -> UserService:
    return UserService(InMemoryUserRepository())


@pytest.fixture
def passwords(settings: AuthSettings) -> PasswordService:
    return PasswordService(settings)


@pytest.fixture
def guard(
    user_service: UserService, passwords: PasswordService, settings: AuthSettings
) -> LoginGuard:
    return LoginGuard(user_service, passwords, settings)


class TestAuthenticate:
    """Tests for LoginGuard.authenticate()."""

    @pytest.mark.asyncio
    async def test_successful_login_clears_counters(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        """Should reset failed attempts and record the login time."""
        # Arrange
        user = await user_service.create(
            make_user(
                password_hash=passwords.hash(PASSWORD),
                is_email_verified=True,
                login_attempts=3,
            )
        )

        # Act
        logged_in = await guard.authenticate(user.email, PASSWORD)

        # Assert
        assert logged_in.id == user.id
        assert logged_in.login_attempts == 0
        assert logged_in.last_login_at is not None

    @pytest.mark.asyncio
    async def test_unknown_email_is_invalid_credentials(self, guard: LoginGuard):
        with pytest.raises(AuthenticationError) as exc_info:
            await guard.authenticate("nobody@example.com", PASSWORD)

        assert exc_info.value.reason == AuthenticationError.INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_wrong_password_counts_attempt(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        # Arrange
        user = await user_service.create(
            make_user(password_hash=passwords.hash(PASSWORD), is_email_verified=True)
        )

        # Act
        with pytest.raises(AuthenticationError) as exc_info:
            await guard.authenticate(user.email, "Wrong1234")

        # Assert
        assert exc_info.value.reason == AuthenticationError.INVALID_CREDENTIALS
        stored = await user_service.get_by_id(user.id)
        assert stored.login_attempts == 1
        assert not stored.is_locked

    @pytest.mark.asyncio
    async def test_fifth_failure_locks_account(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        """Reaching the threshold should lock out even the right password."""
        # Arrange
        user = await user_service.create(
            make_user(password_hash=passwords.hash(PASSWORD), is_email_verified=True)
        )
        for _ in range(5):
            with pytest.raises(AuthenticationError):
                await guard.authenticate(user.email, "Wrong1234")

        # Act
        with pytest.raises(AuthenticationError) as exc_info:
            await guard.authenticate(user.email, PASSWORD)

        # Assert
        assert exc_info.value.reason == AuthenticationError.INVALID_CREDENTIALS
        stored = await user_service.get_by_id(user.id)
        assert stored.is_locked
        assert stored.lock_until is not None
        assert stored.login_attempts == 5

    @pytest.mark.asyncio
    async def test_expired_lock_allows_login(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        # Arrange
        past = datetime.now(timezone.utc) - timedelta(minutes=1)
        user = await user_service.create(
            make_user(
                password_hash=passwords.hash(PASSWORD),
                is_email_verified=True,
                is_locked=True,
                lock_until=past,
                login_attempts=5,
            )
        )

        # Act
        logged_in = await guard.authenticate(user.email, PASSWORD)

        # Assert
        assert not logged_in.is_locked
        assert logged_in.lock_until is None
        assert logged_in.login_attempts == 0

    @pytest.mark.asyncio
    async def test_failure_after_expired_lock_starts_new_count(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        past = datetime.now(timezone.utc) - timedelta(minutes=1)
        user = await user_service.create(
            make_user(
                password_hash=passwords.hash(PASSWORD),
                is_email_verified=True,
                is_locked=True,
                lock_until=past,
                login_attempts=5,
            )
        )

        with pytest.raises(AuthenticationError):
            await guard.authenticate(user.email, "Wrong1234")

        stored = await user_service.get_by_id(user.id)
        assert stored.login_attempts == 1
        assert not stored.is_locked

    @pytest.mark.asyncio
    async def test_oauth_only_account_is_told_to_use_provider(
        self, guard: LoginGuard, user_service: UserService
    ):
        user = await user_service.create(
            make_user(
                methods={AuthMethod.GOOGLE}, google_id="g-1", is_email_verified=True
            )
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await guard.authenticate(user.email, PASSWORD)

        assert exc_info.value.reason == AuthenticationError.USE_OAUTH
        assert exc_info.value.extra == {"requires_password_setup": True}

    @pytest.mark.asyncio
    async def test_unverified_account_with_right_password(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        """Should ask for verification without counting a failure."""
        # Arrange
        user = await user_service.create(
            make_user(password_hash=passwords.hash(PASSWORD), is_email_verified=False)
        )

        # Act
        with pytest.raises(AuthenticationError) as exc_info:
            await guard.authenticate(user.email, PASSWORD)

        # Assert
        assert exc_info.value.reason == AuthenticationError.REQUIRES_VERIFICATION
        stored = await user_service.get_by_id(user.id)
        assert stored.login_attempts == 0

    @pytest.mark.asyncio
    async def test_concurrent_failures_are_all_counted(
        self, guard: LoginGuard, user_service: UserService, passwords: PasswordService
    ):
        """Parallel wrong passwords must not lose increments."""
        # Arrange
        user = await user_service.create(
            make_user(password_hash=passwords.hash(PASSWORD), is_email_verified=True)
        )

        async def attempt():
            with pytest.raises(AuthenticationError):
                await guard.authenticate(user.email, "Wrong1234")

        # Act
        await asyncio.gather(*(attempt() for _ in range(5)))

        # Assert
        stored = await user_service.get_by_id(user.id)
        assert stored.login_attempts == 5
        assert stored.is_locked
