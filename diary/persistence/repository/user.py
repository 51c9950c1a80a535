"""PostgreSQL implementation of User repository."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from diary.domain.error import ConflictError, NotFoundError
from diary.domain.model import User
from diary.domain.repository import UserMutation, UserRepository
from diary.domain.value import AuthMethod, UserId
from diary.persistence.database import transaction
from diary.persistence.mappers import row_to_user, user_to_dict
from diary.persistence.tables import users_table

_PROVIDER_COLUMNS = {
    AuthMethod.GOOGLE: users_table.c.google_id,
    AuthMethod.APPLE: users_table.c.apple_id,
}


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Unlike the other repositories this one does not use the request session:
    each call runs in its own transaction, so a committed write survives a
    later failure in the same request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for short-lived sessions
        """
        self.session_factory = session_factory

    async def _find_one(self, *criteria) -> Optional[User]:
        stmt = select(users_table).where(*criteria)
        async with transaction(self.session_factory) as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(users_table.c.email == email.strip().lower())

    async def find_by_provider_id(
        self, provider: AuthMethod, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by Google or Apple subject identifier."""
        column = _PROVIDER_COLUMNS.get(provider)
        if column is None:
            return None
        return await self._find_one(column == provider_user_id)

    async def find_by_reset_token_hash(self, token_hash: str) -> Optional[User]:
        """Find a user holding a password reset token."""
        return await self._find_one(
            users_table.c.password_reset_token_hash == token_hash
        )

    async def create(self, user: User) -> User:
        """Insert a new user.

        Raises:
            ConflictError: If email or a provider id is already taken
        """
        try:
            async with transaction(self.session_factory) as session:
                await session.execute(users_table.insert().values(**user_to_dict(user)))
        except IntegrityError as e:
            logfire.warn("User insert rejected", error=str(e.orig))
            raise ConflictError("Account already exists with this email")
        return user

    async def update(self, user_id: UserId, mutate: UserMutation) -> User:
        """Read-modify-write one user under ``SELECT ... FOR UPDATE``.

        Exceptions raised by ``mutate`` roll the transaction back and propagate.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new state collides with another user
        """
        try:
            async with transaction(self.session_factory) as session:
                stmt = (
                    select(users_table)
                    .where(users_table.c.id == user_id)
                    .with_for_update()
                )
                result = await session.execute(stmt)
                row = result.mappings().first()
                if not row:
                    raise NotFoundError("User", str(user_id))

                updated = mutate(row_to_user(dict(row))).model_copy(
                    update={"updated_at": datetime.now(timezone.utc)}
                )
                values = user_to_dict(updated)
                values.pop("id")
                values.pop("created_at")
                await session.execute(
                    users_table.update()
                    .where(users_table.c.id == user_id)
                    .values(**values)
                )
        except IntegrityError as e:
            logfire.warn("User update rejected", user_id=str(user_id), error=str(e.orig))
            raise ConflictError("Account details collide with another account")
        return updated
