"""Unit tests for RegisterUseCase and VerifyOtpUseCase."""

import pytest
from dishka import AsyncContainer
from pydantic import ValidationError as RequestValidationError

from diary.application.usecase.auth.register import RegisterRequest, RegisterUseCase
from diary.application.usecase.auth.resend_otp import (
    GENERIC_MESSAGE,
    ResendOtpRequest,
    ResendOtpUseCase,
)
from diary.application.usecase.auth.verify_otp import VerifyOtpRequest, VerifyOtpUseCase
from diary.config import AuthSettings
from diary.domain.error import ConflictError, NoOtpPending, OtpMismatch
from diary.domain.service import EmailClient, JWTService, PasswordService, UserService
from diary.domain.value import AuthMethod
from tests.conftest import PASSWORD, make_user, sent_otp
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def register_request(**fields) -> RegisterRequest:
    return RegisterRequest(
        name=fields.get("name", "Alice"),
        email=fields.get("email", "alice@example.com"),
        password=fields.get("password", PASSWORD),
    )


class TestRegisterRequest:
    """Validation of registration input."""

    @pytest.mark.parametrize(
        "password",
        ["Short1", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"],
    )
    def test_weak_passwords_are_rejected(self, password: str):
        with pytest.raises(RequestValidationError):
            register_request(password=password)

    def test_hash_shaped_password_is_rejected(self):
        """A password that looks like a bcrypt hash would be stored verbatim."""
        password_hash = PasswordService(AuthSettings(bcrypt_rounds=4)).hash(PASSWORD)

        with pytest.raises(RequestValidationError):
            register_request(password=password_hash)

    def test_name_is_trimmed(self):
        assert register_request(name="  Al  ").name == "Al"

    def test_one_letter_name_is_rejected(self):
        with pytest.raises(RequestValidationError):
            register_request(name=" A ")


class TestRegisterUseCase:
    """Tests for RegisterUseCase."""

    @pytest.mark.asyncio
    async def test_register_emails_code(self, unit_env: AsyncContainer):
        """Should store an unverified user and email a verification code."""
        # Arrange
        use_case = await unit_env.get(RegisterUseCase)
        email_client = await unit_env.get(EmailClient)
        user_service = await unit_env.get(UserService)

        # Act
        response = await use_case.execute(register_request(email="Alice@Example.com"))

        # Assert
        assert response.email == "alice@example.com"
        assert response.requires_verification
        assert not response.linking_account
        assert response.otp_delivered
        assert sent_otp(email_client, "alice@example.com")
        user = await user_service.get_user_by_email("alice@example.com")
        assert user is not None and not user.is_email_verified

    @pytest.mark.asyncio
    async def test_register_twice_conflicts(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(RegisterUseCase)
        await use_case.execute(register_request())

        with pytest.raises(ConflictError):
            await use_case.execute(register_request())

    @pytest.mark.asyncio
    async def test_delivery_failure_keeps_account(self, unit_env: AsyncContainer):
        """A failed email is reported, not raised; the user can resend."""
        # Arrange
        use_case = await unit_env.get(RegisterUseCase)
        email_client = await unit_env.get(EmailClient)
        email_client.fail = True

        # Act
        response = await use_case.execute(register_request())

        # Assert
        assert not response.otp_delivered
        user_service = await unit_env.get(UserService)
        assert await user_service.get_user_by_email("alice@example.com") is not None

    @pytest.mark.asyncio
    async def test_register_on_oauth_account_starts_linking(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.create(
            make_user(
                methods={AuthMethod.GOOGLE}, google_id="g-1", is_email_verified=True
            )
        )
        use_case = await unit_env.get(RegisterUseCase)

        # Act
        response = await use_case.execute(register_request())

        # Assert
        assert response.linking_account
        assert "Google/Apple" in response.message


class TestVerifyOtpUseCase:
    """Tests for VerifyOtpUseCase."""

    @pytest.mark.asyncio
    async def test_correct_code_returns_session(self, unit_env: AsyncContainer):
        """Should verify the email and return a token for the user."""
        # Arrange
        register = await unit_env.get(RegisterUseCase)
        verify = await unit_env.get(VerifyOtpUseCase)
        email_client = await unit_env.get(EmailClient)
        jwt_service = await unit_env.get(JWTService)
        await register.execute(register_request())
        code = sent_otp(email_client, "alice@example.com")

        # Act
        response = await verify.execute(
            VerifyOtpRequest(email="alice@example.com", otp=code)
        )

        # Assert
        assert response.user.is_email_verified
        assert jwt_service.verify_token(response.token).user_id == response.user.id

    @pytest.mark.asyncio
    async def test_wrong_code_is_counted(self, unit_env: AsyncContainer):
        # Arrange
        register = await unit_env.get(RegisterUseCase)
        verify = await unit_env.get(VerifyOtpUseCase)
        email_client = await unit_env.get(EmailClient)
        user_service = await unit_env.get(UserService)
        await register.execute(register_request())
        code = sent_otp(email_client, "alice@example.com")
        wrong = "0000" if code != "0000" else "1111"

        # Act
        with pytest.raises(OtpMismatch) as exc_info:
            await verify.execute(VerifyOtpRequest(email="alice@example.com", otp=wrong))

        # Assert
        assert exc_info.value.attempts_remaining == 4
        user = await user_service.get_user_by_email("alice@example.com")
        assert user.otp_attempts == 1

    @pytest.mark.asyncio
    async def test_unknown_email_looks_like_no_code(self, unit_env: AsyncContainer):
        verify = await unit_env.get(VerifyOtpUseCase)

        with pytest.raises(NoOtpPending):
            await verify.execute(VerifyOtpRequest(email="nobody@example.com", otp="1234"))

    @pytest.mark.asyncio
    async def test_link_completes_after_verification(self, unit_env: AsyncContainer):
        """Registering on a Google account adds EMAIL once the code is verified."""
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.create(
            make_user(
                methods={AuthMethod.GOOGLE}, google_id="g-1", is_email_verified=True
            )
        )
        register = await unit_env.get(RegisterUseCase)
        verify = await unit_env.get(VerifyOtpUseCase)
        email_client = await unit_env.get(EmailClient)
        await register.execute(register_request())

        # Act
        response = await verify.execute(
            VerifyOtpRequest(
                email="alice@example.com",
                otp=sent_otp(email_client, "alice@example.com"),
            )
        )

        # Assert
        assert set(response.user.auth_methods) == {AuthMethod.EMAIL, AuthMethod.GOOGLE}


class TestResendOtpUseCase:
    """Tests for ResendOtpUseCase."""

    @pytest.mark.asyncio
    async def test_resend_replaces_code(self, unit_env: AsyncContainer):
        # Arrange
        register = await unit_env.get(RegisterUseCase)
        resend = await unit_env.get(ResendOtpUseCase)
        verify = await unit_env.get(VerifyOtpUseCase)
        email_client = await unit_env.get(EmailClient)
        await register.execute(register_request())
        count_before = len(email_client.sent)

        # Act
        response = await resend.execute(ResendOtpRequest(email="alice@example.com"))

        # Assert
        assert response.message == GENERIC_MESSAGE
        assert len(email_client.sent) == count_before + 1
        code = sent_otp(email_client, "alice@example.com")
        result = await verify.execute(VerifyOtpRequest(email="alice@example.com", otp=code))
        assert result.user.is_email_verified

    @pytest.mark.asyncio
    async def test_unknown_and_verified_accounts_get_same_answer(
        self, unit_env: AsyncContainer
    ):
        """Resend must not reveal whether an account exists."""
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.create(make_user(is_email_verified=True, password_hash="h"))
        resend = await unit_env.get(ResendOtpUseCase)
        email_client = await unit_env.get(EmailClient)

        # Act
        unknown = await resend.execute(ResendOtpRequest(email="nobody@example.com"))
        verified = await resend.execute(ResendOtpRequest(email="alice@example.com"))

        # Assert
        assert unknown.message == verified.message == GENERIC_MESSAGE
        assert email_client.sent == []
