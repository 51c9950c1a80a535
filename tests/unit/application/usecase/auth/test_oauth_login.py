"""Unit tests for the OAuth login use cases."""

from urllib.parse import parse_qs, urlparse

import pytest
from dishka import AsyncContainer

from diary.adapter.apple.client import AppleOAuthClient
from diary.adapter.error import InvalidProviderToken
from diary.adapter.google.client import GoogleOAuthClient
from diary.application.usecase.auth.oauth_login import (
    IdTokenLoginRequest,
    IdTokenLoginUseCase,
    InitiateOAuthLoginUseCase,
    OAuthCallbackRequest,
    OAuthCallbackUseCase,
)
from diary.domain.error import ConflictError
from diary.domain.service import UserService
from diary.domain.value import AuthMethod, OAuthIdentity
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def identity(provider: AuthMethod, subject: str, **fields) -> OAuthIdentity:
    return OAuthIdentity(
        provider=provider,
        provider_user_id=subject,
        email=fields.pop("email", "alice@example.com"),
        email_verified=fields.pop("email_verified", True),
        **fields,
    )


class TestInitiateOAuthLogin:
    """Tests for InitiateOAuthLoginUseCase."""

    @pytest.mark.asyncio
    async def test_returns_provider_url_with_state(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(InitiateOAuthLoginUseCase)

        url = await use_case.execute(AuthMethod.GOOGLE)

        assert "mock=true" in url
        assert parse_qs(urlparse(url).query)["state"][0]

    @pytest.mark.asyncio
    async def test_state_differs_per_request(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(InitiateOAuthLoginUseCase)

        assert await use_case.execute(AuthMethod.APPLE) != await use_case.execute(
            AuthMethod.APPLE
        )


class TestOAuthCallback:
    """Tests for OAuthCallbackUseCase."""

    @pytest.mark.asyncio
    async def test_new_user_is_sent_to_password_setup(self, unit_env: AsyncContainer):
        """A fresh OAuth account can only use the provider, so it is offered a password."""
        # Arrange
        google = await unit_env.get(GoogleOAuthClient)
        google.register("code-1", identity(AuthMethod.GOOGLE, "g-1", name="Alice"))
        use_case = await unit_env.get(OAuthCallbackUseCase)

        # Act
        url = await use_case.execute(
            OAuthCallbackRequest(provider=AuthMethod.GOOGLE, code="code-1", state="s")
        )

        # Assert
        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.path == "/auth/callback"
        assert params["token"][0]
        assert params["action"] == ["set-password"]

    @pytest.mark.asyncio
    async def test_email_user_has_no_setup_action(self, unit_env: AsyncContainer):
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.create(make_user(password_hash="h", is_email_verified=True))
        google = await unit_env.get(GoogleOAuthClient)
        google.register("code-1", identity(AuthMethod.GOOGLE, "g-1"))
        use_case = await unit_env.get(OAuthCallbackUseCase)

        # Act
        url = await use_case.execute(
            OAuthCallbackRequest(provider=AuthMethod.GOOGLE, code="code-1", state="s")
        )

        # Assert
        assert "action" not in parse_qs(urlparse(url).query)

    @pytest.mark.asyncio
    async def test_apple_name_from_form_is_used(self, unit_env: AsyncContainer):
        """Apple sends the name outside the token on first sign-in."""
        # Arrange
        apple = await unit_env.get(AppleOAuthClient)
        apple.register("code-a", identity(AuthMethod.APPLE, "a-1"))
        use_case = await unit_env.get(OAuthCallbackUseCase)
        user_service = await unit_env.get(UserService)

        # Act
        await use_case.execute(
            OAuthCallbackRequest(
                provider=AuthMethod.APPLE, code="code-a", state="s", name="Alice Apple"
            )
        )

        # Assert
        user = await user_service.get_user_by_provider_id(AuthMethod.APPLE, "a-1")
        assert user.name == "Alice Apple"

    @pytest.mark.asyncio
    async def test_rejected_code(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(OAuthCallbackUseCase)

        with pytest.raises(InvalidProviderToken):
            await use_case.execute(
                OAuthCallbackRequest(provider=AuthMethod.GOOGLE, code="bad", state="s")
            )


class TestIdTokenLogin:
    """Tests for IdTokenLoginUseCase."""

    @pytest.mark.asyncio
    async def test_google_then_apple_share_one_account(self, unit_env: AsyncContainer):
        """Both providers with the same verified email resolve to one user."""
        # Arrange
        google = await unit_env.get(GoogleOAuthClient)
        apple = await unit_env.get(AppleOAuthClient)
        google.register("g-token", identity(AuthMethod.GOOGLE, "g-1"))
        apple.register("a-token", identity(AuthMethod.APPLE, "a-1"))
        use_case = await unit_env.get(IdTokenLoginUseCase)

        # Act
        first = await use_case.execute(
            AuthMethod.GOOGLE, IdTokenLoginRequest(id_token="g-token")
        )
        second = await use_case.execute(
            AuthMethod.APPLE, IdTokenLoginRequest(id_token="a-token")
        )

        # Assert
        assert first.user.id == second.user.id
        assert set(second.user.auth_methods) == {AuthMethod.GOOGLE, AuthMethod.APPLE}

    @pytest.mark.asyncio
    async def test_second_google_account_for_same_email_conflicts(
        self, unit_env: AsyncContainer
    ):
        google = await unit_env.get(GoogleOAuthClient)
        google.register("first", identity(AuthMethod.GOOGLE, "g-1"))
        google.register("second", identity(AuthMethod.GOOGLE, "g-2"))
        use_case = await unit_env.get(IdTokenLoginUseCase)
        await use_case.execute(AuthMethod.GOOGLE, IdTokenLoginRequest(id_token="first"))

        with pytest.raises(ConflictError):
            await use_case.execute(
                AuthMethod.GOOGLE, IdTokenLoginRequest(id_token="second")
            )

    @pytest.mark.asyncio
    async def test_invalid_token(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(IdTokenLoginUseCase)

        with pytest.raises(InvalidProviderToken):
            await use_case.execute(
                AuthMethod.APPLE, IdTokenLoginRequest(id_token="forged")
            )
