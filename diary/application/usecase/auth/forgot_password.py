"""Forgot password use cases.

Two recovery paths exist. OAuth-only accounts get an emailed link to set
a first password; email/password accounts get a temporary password.
Both answer identically for unknown emails.
"""

from datetime import timedelta

import logfire
from pydantic import BaseModel, EmailStr

from diary.application.usecase.base import BaseUseCase
from diary.config import AuthSettings
from diary.domain.error import DependencyError
from diary.domain.model import User
from diary.domain.model.user import utcnow
from diary.domain.service import EmailService, PasswordService, UserService

from .common import MessageResponse

SETUP_LINK_MESSAGE = "If an account exists for this email, a setup link has been sent"
TEMPORARY_PASSWORD_MESSAGE = (
    "If an account exists for this email, a temporary password has been sent"
)


class ForgotPasswordRequest(BaseModel):
    """Forgot password request."""

    email: EmailStr


class ForgotPasswordUseCase(BaseUseCase):
    """Use case for emailing a password setup link to an OAuth-only account."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        email_service: EmailService,
        auth_settings: AuthSettings,
    ) -> None:
        self.user_service = user_service
        self.password_service = password_service
        self.email_service = email_service
        self.auth_settings = auth_settings

    async def execute(self, request: ForgotPasswordRequest) -> MessageResponse:
        """Store a hashed reset token and email the raw token as a link."""
        user = await self.user_service.get_user_by_email(request.email.lower())
        if not user or not user.is_oauth_only:
            logfire.info("Password setup link not applicable")
            return MessageResponse(message=SETUP_LINK_MESSAGE)

        token, token_hash = self.password_service.generate_reset_token()
        expires_at = utcnow() + timedelta(
            minutes=self.auth_settings.password_reset_ttl_minutes
        )

        await self.user_service.update(
            user.id,
            lambda u: u.model_copy(
                update={
                    "password_reset_token_hash": token_hash,
                    "password_reset_expires_at": expires_at,
                }
            ),
        )

        try:
            await self.email_service.send_password_setup_link(user.email, token)
        except DependencyError as e:
            logfire.error(
                "Password setup email failed", user_id=str(user.id), error=str(e)
            )

        return MessageResponse(message=SETUP_LINK_MESSAGE)


class ForgotPasswordTemporaryUseCase(BaseUseCase):
    """Use case for replacing a forgotten password with a temporary one."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        email_service: EmailService,
    ) -> None:
        self.user_service = user_service
        self.password_service = password_service
        self.email_service = email_service

    async def execute(self, request: ForgotPasswordRequest) -> MessageResponse:
        """Email a temporary password, then make it the account's password.

        The hash is stored only after the email went out, so a delivery
        failure leaves the old password working. The answer is the same
        whether or not the account exists or the email was delivered.
        Verification and lockout state are left untouched.
        """
        user = await self.user_service.get_user_by_email(request.email.lower())
        if not user or user.is_oauth_only:
            logfire.info("Temporary password not applicable")
            return MessageResponse(message=TEMPORARY_PASSWORD_MESSAGE)

        temporary = self.password_service.generate_temporary_password()
        password_hash = self.password_service.hash_if_needed(temporary)

        try:
            await self.email_service.send_temporary_password(
                user.email, user.name, temporary
            )
        except DependencyError as e:
            logfire.error(
                "Temporary password email failed", user_id=str(user.id), error=str(e)
            )
            return MessageResponse(message=TEMPORARY_PASSWORD_MESSAGE)

        def apply(current: User) -> User:
            return current.model_copy(update={"password_hash": password_hash})

        updated = await self.user_service.update(user.id, apply)
        logfire.info("Temporary password issued", user_id=str(updated.id))

        return MessageResponse(message=TEMPORARY_PASSWORD_MESSAGE)
