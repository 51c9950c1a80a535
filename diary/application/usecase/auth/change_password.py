"""Change password use case."""

import logfire
from pydantic import BaseModel, Field, field_validator

from diary.application.usecase.base import BaseUseCase
from diary.domain.error import AuthenticationError, ValidationError
from diary.domain.model import User
from diary.domain.service import PasswordService, UserService
from diary.domain.value import UserId

from .common import MessageResponse, validate_password_strength


class ChangePasswordRequest(BaseModel):
    """Change password request."""

    current_password: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return validate_password_strength(v)


class ChangePasswordUseCase(BaseUseCase):
    """Use case for changing the password of a signed-in user."""

    def __init__(
        self, user_service: UserService, password_service: PasswordService
    ) -> None:
        self.user_service = user_service
        self.password_service = password_service

    async def execute(
        self, user_id: UserId, request: ChangePasswordRequest
    ) -> MessageResponse:
        """Replace the password after checking the current one.

        Raises:
            ValidationError: If the account has no password or the new one
                equals the current one
            AuthenticationError: If the current password is wrong
        """
        user = await self.user_service.get_by_id(user_id)
        if user.is_oauth_only:
            raise ValidationError(
                "This account signs in with Google/Apple and has no password"
            )
        if not self.password_service.verify(request.current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        if request.new_password == request.current_password:
            raise ValidationError(
                "New password must be different from the current password"
            )

        old_hash = user.password_hash
        password_hash = self.password_service.hash_if_needed(request.new_password)

        def apply(current: User) -> User:
            if current.password_hash != old_hash:
                raise AuthenticationError("Current password is incorrect")
            return current.model_copy(update={"password_hash": password_hash})

        await self.user_service.update(user_id, apply)
        logfire.info("Password changed", user_id=str(user_id))
        return MessageResponse(message="Password changed successfully")
