"""Login use case."""

from pydantic import BaseModel, EmailStr, Field

from diary.application.usecase.base import BaseUseCase
from diary.domain.service import JWTService, LoginGuard

from .common import AuthTokenResponse, UserInfo


class LoginRequest(BaseModel):
    """Email/password login request."""

    email: EmailStr
    password: str = Field(min_length=1)


class LoginUseCase(BaseUseCase):
    """Use case for email/password login."""

    def __init__(self, login_guard: LoginGuard, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            login_guard: Login throttling domain service
            jwt_service: JWT token domain service
        """
        self.login_guard = login_guard
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> AuthTokenResponse:
        """Authenticate and mint a session token.

        Raises:
            AuthenticationError: With reason invalid_credentials,
                requires_verification or use_oauth
        """
        user = await self.login_guard.authenticate(
            request.email.lower(), request.password
        )
        token = self.jwt_service.create_token(user.id)
        return AuthTokenResponse(token=token, user=UserInfo.from_user(user))
