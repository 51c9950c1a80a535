"""Get current user use case."""

from diary.application.usecase.base import BaseUseCase
from diary.domain.service import UserService
from diary.domain.value import UserId

from .common import UserInfo


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the signed-in user's profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, user_id: UserId) -> UserInfo:
        user = await self.user_service.get_by_id(user_id)
        return UserInfo.from_user(user)
