"""Reset password use case."""

import logfire
from pydantic import BaseModel, Field, field_validator

from diary.application.usecase.base import BaseUseCase
from diary.domain.error import AuthenticationError
from diary.domain.model import User
from diary.domain.model.user import utcnow
from diary.domain.service import JWTService, PasswordService, UserService
from diary.domain.value import AuthMethod

from .common import AuthTokenResponse, UserInfo, validate_password_strength


class ResetPasswordRequest(BaseModel):
    """Reset password request carrying the emailed token."""

    token: str = Field(min_length=1)
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)


def _invalid_token() -> AuthenticationError:
    return AuthenticationError(
        "Invalid or expired reset token", reason=AuthenticationError.INVALID_TOKEN
    )


class ResetPasswordUseCase(BaseUseCase):
    """Use case for setting a password from a reset link."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize reset password use case.

        Args:
            user_service: User domain service
            password_service: Password hashing service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.jwt_service = jwt_service

    async def execute(self, request: ResetPasswordRequest) -> AuthTokenResponse:
        """Consume the token, set the password and sign the user in.

        The email address is treated as proven since the token arrived by
        email, so the EMAIL method is added and the account verified.

        Raises:
            AuthenticationError: If the token is unknown, used or expired
        """
        token_hash = self.password_service.hash_token(request.token)
        user = await self.user_service.get_user_by_reset_token(token_hash)
        if not user:
            raise _invalid_token()

        password_hash = self.password_service.hash_if_needed(request.password)
        now = utcnow()

        def apply(current: User) -> User:
            if (
                current.password_reset_token_hash != token_hash
                or current.password_reset_expires_at is None
                or current.password_reset_expires_at <= now
            ):
                raise _invalid_token()
            return current.model_copy(
                update={
                    "password_hash": password_hash,
                    "auth_methods": current.auth_methods | {AuthMethod.EMAIL},
                    "is_email_verified": True,
                    "password_reset_token_hash": None,
                    "password_reset_expires_at": None,
                    "login_attempts": 0,
                    "is_locked": False,
                    "lock_until": None,
                    "email_otp_hash": None,
                    "email_otp_expires_at": None,
                    "otp_attempts": 0,
                    "last_login_at": now,
                }
            )

        updated = await self.user_service.update(user.id, apply)
        logfire.info("Password set from reset link", user_id=str(updated.id))

        token = self.jwt_service.create_token(updated.id)
        return AuthTokenResponse(token=token, user=UserInfo.from_user(updated))
