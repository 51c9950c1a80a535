"""Unit tests for the password recovery and change use cases."""

import pytest
from dishka import AsyncContainer

from diary.adapter.email.smtp import MockEmailClient
from diary.application.usecase.auth.change_password import (
    ChangePasswordRequest,
    ChangePasswordUseCase,
)
from diary.application.usecase.auth.forgot_password import (
    SETUP_LINK_MESSAGE,
    TEMPORARY_PASSWORD_MESSAGE,
    ForgotPasswordRequest,
    ForgotPasswordTemporaryUseCase,
    ForgotPasswordUseCase,
)
from diary.application.usecase.auth.login import LoginRequest, LoginUseCase
from diary.application.usecase.auth.reset_password import (
    ResetPasswordRequest,
    ResetPasswordUseCase,
)
from diary.domain.error import AuthenticationError, ValidationError
from diary.domain.service import EmailClient, PasswordService, UserService
from diary.domain.value import AuthMethod
from tests.conftest import PASSWORD, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def emailed_token(email_client: MockEmailClient, to: str) -> str:
    message = email_client.last_to(to)
    assert message is not None
    return message.text.split("token=")[1].split()[0]


async def create_password_user(container: AsyncContainer, **fields):
    user_service = await container.get(UserService)
    password_service = await container.get(PasswordService)
    return await user_service.create(
        make_user(
            password_hash=password_service.hash(PASSWORD),
            is_email_verified=True,
            **fields,
        )
    )


async def create_google_user(container: AsyncContainer):
    user_service = await container.get(UserService)
    return await user_service.create(
        make_user(methods={AuthMethod.GOOGLE}, google_id="g-1", is_email_verified=True)
    )


class TestForgotPasswordSetupLink:
    """Tests for ForgotPasswordUseCase and ResetPasswordUseCase."""

    @pytest.mark.asyncio
    async def test_oauth_user_sets_password_from_link(self, unit_env: AsyncContainer):
        """The emailed token should let an OAuth-only user add a password."""
        # Arrange
        await create_google_user(unit_env)
        forgot = await unit_env.get(ForgotPasswordUseCase)
        reset = await unit_env.get(ResetPasswordUseCase)
        email_client = await unit_env.get(EmailClient)
        await forgot.execute(ForgotPasswordRequest(email="alice@example.com"))
        token = emailed_token(email_client, "alice@example.com")

        # Act
        response = await reset.execute(
            ResetPasswordRequest(token=token, password="NewPassword1")
        )

        # Assert
        assert set(response.user.auth_methods) == {AuthMethod.GOOGLE, AuthMethod.EMAIL}
        assert response.token
        login = await unit_env.get(LoginUseCase)
        await login.execute(
            LoginRequest(email="alice@example.com", password="NewPassword1")
        )

    @pytest.mark.asyncio
    async def test_reset_token_is_single_use(self, unit_env: AsyncContainer):
        # Arrange
        await create_google_user(unit_env)
        forgot = await unit_env.get(ForgotPasswordUseCase)
        reset = await unit_env.get(ResetPasswordUseCase)
        email_client = await unit_env.get(EmailClient)
        await forgot.execute(ForgotPasswordRequest(email="alice@example.com"))
        token = emailed_token(email_client, "alice@example.com")
        await reset.execute(ResetPasswordRequest(token=token, password="NewPassword1"))

        # Act / Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await reset.execute(
                ResetPasswordRequest(token=token, password="OtherPassword1")
            )
        assert exc_info.value.reason == AuthenticationError.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_password_account_gets_no_link(self, unit_env: AsyncContainer):
        await create_password_user(unit_env)
        forgot = await unit_env.get(ForgotPasswordUseCase)
        email_client = await unit_env.get(EmailClient)

        response = await forgot.execute(ForgotPasswordRequest(email="alice@example.com"))

        assert response.message == SETUP_LINK_MESSAGE
        assert email_client.sent == []

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env: AsyncContainer):
        reset = await unit_env.get(ResetPasswordUseCase)

        with pytest.raises(AuthenticationError):
            await reset.execute(
                ResetPasswordRequest(token="made-up", password="NewPassword1")
            )


class TestForgotPasswordTemporary:
    """Tests for ForgotPasswordTemporaryUseCase."""

    @pytest.mark.asyncio
    async def test_temporary_password_replaces_old_one(self, unit_env: AsyncContainer):
        """The emailed temporary password works; the old one no longer does."""
        # Arrange
        await create_password_user(unit_env)
        forgot = await unit_env.get(ForgotPasswordTemporaryUseCase)
        login = await unit_env.get(LoginUseCase)
        email_client = await unit_env.get(EmailClient)

        # Act
        response = await forgot.execute(ForgotPasswordRequest(email="alice@example.com"))

        # Assert
        assert response.message == TEMPORARY_PASSWORD_MESSAGE
        text = email_client.last_to("alice@example.com").text
        temporary = text.split("temporary password is ")[1].split(".")[0]
        await login.execute(LoginRequest(email="alice@example.com", password=temporary))
        with pytest.raises(AuthenticationError):
            await login.execute(LoginRequest(email="alice@example.com", password=PASSWORD))

    @pytest.mark.asyncio
    async def test_unknown_email_gets_same_answer(self, unit_env: AsyncContainer):
        forgot = await unit_env.get(ForgotPasswordTemporaryUseCase)
        email_client = await unit_env.get(EmailClient)

        response = await forgot.execute(ForgotPasswordRequest(email="nobody@example.com"))

        assert response.message == TEMPORARY_PASSWORD_MESSAGE
        assert email_client.sent == []

    @pytest.mark.asyncio
    async def test_delivery_failure_keeps_old_password(self, unit_env: AsyncContainer):
        """An undelivered email answers generically and changes nothing."""
        # Arrange
        await create_password_user(unit_env)
        forgot = await unit_env.get(ForgotPasswordTemporaryUseCase)
        login = await unit_env.get(LoginUseCase)
        email_client = await unit_env.get(EmailClient)
        email_client.fail = True

        # Act
        response = await forgot.execute(ForgotPasswordRequest(email="alice@example.com"))

        # Assert
        assert response.message == TEMPORARY_PASSWORD_MESSAGE
        await login.execute(LoginRequest(email="alice@example.com", password=PASSWORD))


class TestChangePassword:
    """Tests for ChangePasswordUseCase."""

    @pytest.mark.asyncio
    async def test_change_password(self, unit_env: AsyncContainer):
        # Arrange
        user = await create_password_user(unit_env)
        change = await unit_env.get(ChangePasswordUseCase)
        login = await unit_env.get(LoginUseCase)

        # Act
        await change.execute(
            user.id,
            ChangePasswordRequest(current_password=PASSWORD, new_password="Changed123"),
        )

        # Assert
        await login.execute(LoginRequest(email=user.email, password="Changed123"))

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, unit_env: AsyncContainer):
        user = await create_password_user(unit_env)
        change = await unit_env.get(ChangePasswordUseCase)

        with pytest.raises(AuthenticationError):
            await change.execute(
                user.id,
                ChangePasswordRequest(
                    current_password="Wrong1234", new_password="Changed123"
                ),
            )

    @pytest.mark.asyncio
    async def test_same_password_is_rejected(self, unit_env: AsyncContainer):
        user = await create_password_user(unit_env)
        change = await unit_env.get(ChangePasswordUseCase)

        with pytest.raises(ValidationError):
            await change.execute(
                user.id,
                ChangePasswordRequest(current_password=PASSWORD, new_password=PASSWORD),
            )

    @pytest.mark.asyncio
    async def test_oauth_only_account_has_no_password(self, unit_env: AsyncContainer):
        user = await create_google_user(unit_env)
        change = await unit_env.get(ChangePasswordUseCase)

        with pytest.raises(ValidationError):
            await change.execute(
                user.id,
                ChangePasswordRequest(
                    current_password="Anything1", new_password="Changed123"
                ),
            )
