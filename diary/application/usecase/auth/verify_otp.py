"""Verify OTP use case."""

import logfire
from pydantic import BaseModel, EmailStr, Field

from diary.application.usecase.base import BaseUseCase
from diary.domain.error import NoOtpPending, OtpError
from diary.domain.model import User
from diary.domain.model.user import utcnow
from diary.domain.service import JWTService, OtpService, UserService

from .common import AuthTokenResponse, UserInfo


class VerifyOtpRequest(BaseModel):
    """OTP verification request."""

    email: EmailStr
    otp: str = Field(min_length=1, max_length=10)


class VerifyOtpUseCase(BaseUseCase):
    """Use case for confirming an email address with a one-time passcode."""

    def __init__(
        self,
        user_service: UserService,
        otp_service: OtpService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize verify OTP use case.

        Args:
            user_service: User domain service
            otp_service: OTP domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.otp_service = otp_service
        self.jwt_service = jwt_service

    async def execute(self, request: VerifyOtpRequest) -> AuthTokenResponse:
        """Check the code and sign the user in.

        A failed check is persisted (attempt counter) before the error is
        raised. Unknown emails fail exactly like a missing code.

        Raises:
            OtpError: NoOtpPending, OtpExpired, TooManyOtpAttempts or OtpMismatch
        """
        user = await self.user_service.get_user_by_email(request.email.lower())
        if not user:
            logfire.info("OTP verification for unknown email")
            raise NoOtpPending()

        now = utcnow()
        failure: OtpError | None = None

        def apply(current: User) -> User:
            nonlocal failure
            check = self.otp_service.verify(current, request.otp, now)
            failure = check.error
            return check.user

        updated = await self.user_service.update(user.id, apply)
        if failure:
            raise failure

        logfire.info("Email verified", user_id=str(updated.id))
        token = self.jwt_service.create_token(updated.id)
        return AuthTokenResponse(token=token, user=UserInfo.from_user(updated))
