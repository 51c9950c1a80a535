"""Update profile use case."""

import logfire
from pydantic import BaseModel, field_validator

from diary.application.usecase.base import BaseUseCase
from diary.domain.error import ValidationError
from diary.domain.model import User
from diary.domain.service import MediaStorage, Upload, UserService
from diary.domain.value import UserId

from .common import UserInfo


class UpdateProfileRequest(BaseModel):
    """Profile changes; ``None`` leaves a field unchanged."""

    name: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not 2 <= len(v) <= 100:
            raise ValueError("Name must be between 2 and 100 characters")
        return v


class UpdateProfileUseCase(BaseUseCase):
    """Use case for updating name and avatar."""

    def __init__(self, user_service: UserService, media_storage: MediaStorage) -> None:
        self.user_service = user_service
        self.media_storage = media_storage

    async def execute(
        self,
        user_id: UserId,
        request: UpdateProfileRequest,
        avatar: Upload | None = None,
    ) -> UserInfo:
        """Apply profile changes.

        Args:
            user_id: Signed-in user
            request: Field changes
            avatar: Optional new avatar image

        Raises:
            ValidationError: If the avatar is not an image
        """
        changes: dict = {}
        if request.name is not None:
            changes["name"] = request.name

        if avatar is not None:
            if not avatar.content_type.startswith("image/"):
                raise ValidationError("Avatar must be an image")
            stored = await self.media_storage.store(
                avatar.data, avatar.filename, avatar.content_type
            )
            changes["avatar_url"] = stored.url

        if not changes:
            user = await self.user_service.get_by_id(user_id)
            return UserInfo.from_user(user)

        def apply(current: User) -> User:
            return current.model_copy(update=changes)

        user = await self.user_service.update(user_id, apply)
        logfire.info("Profile updated", user_id=str(user_id), fields=sorted(changes))
        return UserInfo.from_user(user)
