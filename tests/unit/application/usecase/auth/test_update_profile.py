"""Unit tests for profile use cases."""

import pytest
from dishka import AsyncContainer

from diary.adapter.storage.local import InMemoryMediaStorage
from diary.application.usecase.auth.get_current_user import GetCurrentUserUseCase
from diary.application.usecase.auth.update_profile import (
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from diary.domain.error import ValidationError
from diary.domain.service import MediaStorage, Upload, UserService
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateProfile:
    """Tests for UpdateProfileUseCase."""

    @pytest.mark.asyncio
    async def test_update_name_and_avatar(self, unit_env: AsyncContainer):
        # Arrange
        user_service = await unit_env.get(UserService)
        storage: InMemoryMediaStorage = await unit_env.get(MediaStorage)
        user = await user_service.create(make_user())
        use_case = await unit_env.get(UpdateProfileUseCase)

        # Act
        info = await use_case.execute(
            user.id,
            UpdateProfileRequest(name="  Alice B  "),
            Upload("me.png", "image/png", b"png"),
        )

        # Assert
        assert info.name == "Alice B"
        assert info.avatar_url and info.avatar_url.startswith(storage.public_base_url)
        assert len(storage.files) == 1

    @pytest.mark.asyncio
    async def test_avatar_must_be_image(self, unit_env: AsyncContainer):
        user_service = await unit_env.get(UserService)
        user = await user_service.create(make_user())
        use_case = await unit_env.get(UpdateProfileUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                user.id,
                UpdateProfileRequest(),
                Upload("doc.pdf", "application/pdf", b"%PDF"),
            )

    @pytest.mark.asyncio
    async def test_no_changes_returns_current_user(self, unit_env: AsyncContainer):
        user_service = await unit_env.get(UserService)
        user = await user_service.create(make_user())
        use_case = await unit_env.get(UpdateProfileUseCase)
        current = await unit_env.get(GetCurrentUserUseCase)

        info = await use_case.execute(user.id, UpdateProfileRequest())

        assert info == await current.execute(user.id)
