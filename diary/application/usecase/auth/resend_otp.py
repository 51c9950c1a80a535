"""Resend OTP use case."""

import logfire
from pydantic import BaseModel, EmailStr

from diary.application.usecase.base import BaseUseCase
from diary.config import AuthSettings
from diary.domain.error import DependencyError
from diary.domain.model import User
from diary.domain.model.user import utcnow
from diary.domain.service import EmailService, OtpService, UserService

from .common import MessageResponse

GENERIC_MESSAGE = "If the account needs verification, a new code has been sent"


class ResendOtpRequest(BaseModel):
    """Resend OTP request."""

    email: EmailStr


class ResendOtpUseCase(BaseUseCase):
    """Use case for issuing a fresh verification code."""

    def __init__(
        self,
        user_service: UserService,
        otp_service: OtpService,
        email_service: EmailService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize resend OTP use case.

        Args:
            user_service: User domain service
            otp_service: OTP domain service
            email_service: Email domain service
            auth_settings: Authentication settings
        """
        self.user_service = user_service
        self.otp_service = otp_service
        self.email_service = email_service
        self.auth_settings = auth_settings

    @staticmethod
    def _needs_code(user: User) -> bool:
        return not user.is_email_verified or user.password_link_pending

    async def execute(self, request: ResendOtpRequest) -> MessageResponse:
        """Issue and email a new code when one is needed.

        Answers with the same message whether or not the account exists
        or still needs verification.
        """
        user = await self.user_service.get_user_by_email(request.email.lower())
        if not user or not self._needs_code(user):
            logfire.info("OTP resend not needed")
            return MessageResponse(message=GENERIC_MESSAGE)

        code: str | None = None

        def apply(current: User) -> User:
            nonlocal code
            if not self._needs_code(current):
                return current
            current, code = self.otp_service.issue(current, utcnow())
            return current

        updated = await self.user_service.update(user.id, apply)
        if code is None:
            return MessageResponse(message=GENERIC_MESSAGE)

        try:
            await self.email_service.send_otp(
                updated.email, updated.name, code, self.auth_settings.otp_ttl_minutes
            )
        except DependencyError as e:
            logfire.error(
                "Verification email failed", user_id=str(updated.id), error=str(e)
            )

        return MessageResponse(message=GENERIC_MESSAGE)
