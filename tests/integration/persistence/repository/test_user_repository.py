"""Integration tests for PostgresUserRepository.

Runs against the database in DATABASE__URL; skipped when it is not set.
Tables are created if missing and users are cleaned up afterwards.
"""

import asyncio
import os

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine

from diary.domain.error import ConflictError
from diary.domain.repository import UserRepository
from diary.domain.value import AuthMethod
from diary.persistence.tables import metadata, users_table
from tests.conftest import make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture (real PostgreSQL)
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture
async def user_repo(integration_env: AsyncContainer):
    engine = await integration_env.get(AsyncEngine)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield await integration_env.get(UserRepository)

    async with engine.begin() as conn:
        await conn.execute(delete(users_table))


class TestPostgresUserRepository:
    """Round trips, uniqueness and row locking against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_round_trip_keeps_auth_methods(self, user_repo: UserRepository):
        # Arrange
        user = make_user(
            email="pg@example.com",
            methods={AuthMethod.EMAIL, AuthMethod.APPLE},
            apple_id="apple-pg",
            password_hash="hash",
        )

        # Act
        await user_repo.create(user)
        found = await user_repo.find_by_provider_id(AuthMethod.APPLE, "apple-pg")

        # Assert
        assert found is not None
        assert found.id == user.id
        assert found.auth_methods == {AuthMethod.EMAIL, AuthMethod.APPLE}
        assert await user_repo.find_by_email("PG@example.com") == found

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, user_repo: UserRepository):
        await user_repo.create(make_user(email="dup@example.com"))

        with pytest.raises(ConflictError):
            await user_repo.create(make_user(email="dup@example.com"))

    @pytest.mark.asyncio
    async def test_concurrent_updates_are_serialized(self, user_repo: UserRepository):
        """SELECT ... FOR UPDATE must keep every increment."""
        # Arrange
        user = await user_repo.create(make_user(email="lock@example.com"))

        def increment(current):
            return current.model_copy(
                update={"login_attempts": current.login_attempts + 1}
            )

        # Act
        await asyncio.gather(*(user_repo.update(user.id, increment) for _ in range(5)))

        # Assert
        stored = await user_repo.find_by_id(user.id)
        assert stored.login_attempts == 5
