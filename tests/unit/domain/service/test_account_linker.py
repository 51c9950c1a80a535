"""Unit tests for AccountLinker."""

import pytest

from diary.config import AuthSettings
from diary.domain.error import AuthenticationError, ConflictError, ValidationError
from diary.domain.service import (
    AccountLinker,
    LoginGuard,
    OtpService,
    PasswordService,
    UserService,
)
from diary.domain.value import AuthMethod, OAuthIdentity
from diary.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import PASSWORD, make_user


@pytest.fixture
def user_service() -> UserService:
    return UserService(InMemoryUserRepository())


@pytest.fixture
def linker(user_service: UserService) -> AccountLinker:
    settings = AuthSettings(bcrypt_rounds=4)
    return AccountLinker(user_service, PasswordService(settings), OtpService(settings))


def google_identity(**fields) -> OAuthIdentity:
    return OAuthIdentity(
        provider=AuthMethod.GOOGLE,
        provider_user_id=fields.pop("provider_user_id", "google-123"),
        email=fields.pop("email", "alice@example.com"),
        email_verified=fields.pop("email_verified", True),
        name=fields.pop("name", "Alice Google"),
        **fields,
    )


class TestRegisterWithPassword:
    """Tests for AccountLinker.register_with_password()."""

    @pytest.mark.asyncio
    async def test_new_email_creates_unverified_user(self, linker: AccountLinker):
        """Should create an email account waiting for OTP verification."""
        # Act
        registration = await linker.register_with_password(
            "Alice", "alice@example.com", PASSWORD
        )

        # Assert
        user = registration.user
        assert not registration.linking
        assert user.auth_methods == {AuthMethod.EMAIL}
        assert not user.is_email_verified
        assert user.password_hash and user.password_hash != PASSWORD
        assert user.email_otp_hash is not None
        assert registration.otp_code.isdigit()

    @pytest.mark.asyncio
    async def test_existing_email_account_conflicts(
        self, linker: AccountLinker, user_service: UserService
    ):
        await user_service.create(make_user(password_hash="x", is_email_verified=True))

        with pytest.raises(ConflictError):
            await linker.register_with_password("Alice", "alice@example.com", PASSWORD)

    @pytest.mark.asyncio
    async def test_oauth_account_gets_pending_password(
        self, linker: AccountLinker, user_service: UserService
    ):
        """A password for an OAuth account waits for OTP before the method is added."""
        # Arrange
        existing = await user_service.create(
            make_user(
                methods={AuthMethod.GOOGLE}, google_id="google-123", is_email_verified=True
            )
        )

        # Act
        registration = await linker.register_with_password(
            "Alice", "alice@example.com", PASSWORD
        )

        # Assert
        assert registration.linking
        assert registration.user.id == existing.id
        assert registration.user.auth_methods == {AuthMethod.GOOGLE}
        assert registration.user.password_link_pending
        assert registration.user.email_otp_hash is not None


class TestSignInWithProvider:
    """Tests for AccountLinker.sign_in_with_provider()."""

    @pytest.mark.asyncio
    async def test_unknown_identity_creates_verified_user(self, linker: AccountLinker):
        # Act
        login = await linker.sign_in_with_provider(google_identity())

        # Assert
        assert login.created
        assert login.user.google_id == "google-123"
        assert login.user.auth_methods == {AuthMethod.GOOGLE}
        assert login.user.is_email_verified
        assert login.user.password_hash is None
        assert login.user.name == "Alice Google"

    @pytest.mark.asyncio
    async def test_known_provider_id_logs_in(self, linker: AccountLinker):
        first = await linker.sign_in_with_provider(google_identity())

        second = await linker.sign_in_with_provider(google_identity())

        assert not second.created and not second.linked
        assert second.user.id == first.user.id

    @pytest.mark.asyncio
    async def test_provider_id_match_wins_over_changed_email(
        self, linker: AccountLinker
    ):
        first = await linker.sign_in_with_provider(google_identity())

        second = await linker.sign_in_with_provider(
            google_identity(email="new-address@example.com")
        )

        assert second.user.id == first.user.id
        assert second.user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_email_match_links_provider(
        self, linker: AccountLinker, user_service: UserService
    ):
        """An email account gains the provider and becomes verified."""
        # Arrange
        existing = await user_service.create(
            make_user(password_hash="hash", is_email_verified=True)
        )

        # Act
        login = await linker.sign_in_with_provider(
            google_identity(email="ALICE@example.com")
        )

        # Assert
        assert login.linked
        assert login.user.id == existing.id
        assert login.user.auth_methods == {AuthMethod.EMAIL, AuthMethod.GOOGLE}
        assert login.user.google_id == "google-123"
        assert login.user.password_hash == "hash"

    @pytest.mark.asyncio
    async def test_unconfirmed_password_is_dropped_on_link(
        self, linker: AccountLinker, user_service: UserService
    ):
        """A password registered by someone else cannot ride on the link."""
        # Arrange
        settings = AuthSettings(bcrypt_rounds=4)
        guard = LoginGuard(user_service, PasswordService(settings), settings)
        registration = await linker.register_with_password(
            "Mallory", "alice@example.com", PASSWORD
        )

        # Act
        login = await linker.sign_in_with_provider(google_identity())

        # Assert
        assert login.user.id == registration.user.id
        assert login.user.auth_methods == {AuthMethod.GOOGLE}
        assert login.user.password_hash is None
        assert login.user.email_otp_hash is None
        assert login.user.is_email_verified
        with pytest.raises(AuthenticationError) as exc_info:
            await guard.authenticate("alice@example.com", PASSWORD)
        assert exc_info.value.reason == AuthenticationError.USE_OAUTH

    @pytest.mark.asyncio
    async def test_apple_links_to_google_account(self, linker: AccountLinker):
        google = await linker.sign_in_with_provider(google_identity())

        apple = await linker.sign_in_with_provider(
            OAuthIdentity(
                provider=AuthMethod.APPLE,
                provider_user_id="apple-001",
                email="alice@example.com",
                email_verified=True,
            )
        )

        assert apple.user.id == google.user.id
        assert apple.user.auth_methods == {AuthMethod.GOOGLE, AuthMethod.APPLE}
        assert apple.user.apple_id == "apple-001"

    @pytest.mark.asyncio
    async def test_unverified_provider_email_is_not_linked(
        self, linker: AccountLinker, user_service: UserService
    ):
        await user_service.create(make_user(password_hash="hash"))

        with pytest.raises(ValidationError):
            await linker.sign_in_with_provider(google_identity(email_verified=False))

    @pytest.mark.asyncio
    async def test_email_bound_to_other_provider_account_conflicts(
        self, linker: AccountLinker, user_service: UserService
    ):
        """A second Google account cannot take over an email already linked."""
        await user_service.create(
            make_user(methods={AuthMethod.GOOGLE}, google_id="google-other")
        )

        with pytest.raises(ConflictError):
            await linker.sign_in_with_provider(google_identity())

    @pytest.mark.asyncio
    async def test_identity_without_email_and_no_match(self, linker: AccountLinker):
        with pytest.raises(ValidationError):
            await linker.sign_in_with_provider(google_identity(email=None))

    @pytest.mark.asyncio
    async def test_new_user_name_falls_back_to_email_local_part(
        self, linker: AccountLinker
    ):
        login = await linker.sign_in_with_provider(google_identity(name=None))

        assert login.user.name == "alice"
