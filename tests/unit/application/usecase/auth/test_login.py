"""Unit tests for LoginUseCase."""

import pytest
from dishka import AsyncContainer

from diary.application.usecase.auth.login import LoginRequest, LoginUseCase
from diary.domain.error import AuthenticationError
from diary.domain.service import JWTService, PasswordService, UserService
from tests.conftest import PASSWORD, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_returns_token_for_verified_user(
        self, unit_env: AsyncContainer
    ):
        """Login should mint a token for the authenticated user."""
        # Arrange
        user_service = await unit_env.get(UserService)
        password_service = await unit_env.get(PasswordService)
        jwt_service = await unit_env.get(JWTService)
        user = await user_service.create(
            make_user(
                password_hash=password_service.hash(PASSWORD), is_email_verified=True
            )
        )
        use_case = await unit_env.get(LoginUseCase)

        # Act
        response = await use_case.execute(
            LoginRequest(email="ALICE@example.com", password=PASSWORD)
        )

        # Assert
        assert response.user.id == str(user.id)
        assert jwt_service.verify_token(response.token).user_id == str(user.id)

    @pytest.mark.asyncio
    async def test_locked_account_looks_like_wrong_password(
        self, unit_env: AsyncContainer
    ):
        """Lockout must not be distinguishable from bad credentials."""
        # Arrange
        user_service = await unit_env.get(UserService)
        password_service = await unit_env.get(PasswordService)
        await user_service.create(
            make_user(
                password_hash=password_service.hash(PASSWORD), is_email_verified=True
            )
        )
        use_case = await unit_env.get(LoginUseCase)
        wrong = LoginRequest(email="alice@example.com", password="Wrong1234")
        errors = []
        for _ in range(5):
            with pytest.raises(AuthenticationError) as exc_info:
                await use_case.execute(wrong)
            errors.append(exc_info.value)

        # Act
        with pytest.raises(AuthenticationError) as exc_info:
            await use_case.execute(
                LoginRequest(email="alice@example.com", password=PASSWORD)
            )

        # Assert
        assert str(exc_info.value) == str(errors[0])
        assert exc_info.value.reason == errors[0].reason
