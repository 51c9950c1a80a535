"""Register use case."""

import logfire
from pydantic import BaseModel, EmailStr, Field, field_validator

from diary.application.usecase.base import BaseUseCase
from diary.config import AuthSettings
from diary.domain.error import DependencyError
from diary.domain.service import AccountLinker, EmailService

from .common import validate_password_strength


class RegisterRequest(BaseModel):
    """Email/password registration request."""

    name: str = Field(max_length=100)
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)


class RegisterResponse(BaseModel):
    """Registration response.

    ``linking_account`` is True when a password was added to an existing
    Google/Apple account; the OTP then confirms the link.
    """

    message: str
    email: str
    requires_verification: bool = True
    linking_account: bool = False
    otp_delivered: bool


class RegisterUseCase(BaseUseCase):
    """Use case for email/password registration."""

    def __init__(
        self,
        account_linker: AccountLinker,
        email_service: EmailService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize register use case.

        Args:
            account_linker: Account linking domain service
            email_service: Email domain service
            auth_settings: Authentication settings
        """
        self.account_linker = account_linker
        self.email_service = email_service
        self.auth_settings = auth_settings

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Register a user and email them a verification code.

        The account (and its OTP) is stored before the email is sent; a
        delivery failure is reported with ``otp_delivered=False`` so the
        client can offer to resend.

        Raises:
            ConflictError: If an email/password account already exists
        """
        email = request.email.lower()
        registration = await self.account_linker.register_with_password(
            request.name, email, request.password
        )

        delivered = True
        try:
            await self.email_service.send_otp(
                email,
                registration.user.name,
                registration.otp_code,
                self.auth_settings.otp_ttl_minutes,
            )
        except DependencyError as e:
            delivered = False
            logfire.error(
                "Verification email failed",
                user_id=str(registration.user.id),
                error=str(e),
            )

        if registration.linking:
            message = (
                "Account exists with Google/Apple login. Please verify your email "
                "with the code we sent to add password login"
            )
        else:
            message = "Registration successful. Please verify your email with the code we sent"

        return RegisterResponse(
            message=message,
            email=email,
            linking_account=registration.linking,
            otp_delivered=delivered,
        )
