"""In-memory user repository for testing."""

import asyncio
from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional

from diary.domain.error import ConflictError, NotFoundError
from diary.domain.model.user import User
from diary.domain.repository.user import UserMutation, UserRepository
from diary.domain.value import AuthMethod, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Updates are serialized per user with an asyncio.Lock, and the unique
    columns of the SQL schema (email, google_id, apple_id) are enforced.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._locks: defaultdict[UserId, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _check_unique(self, user: User) -> None:
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise ConflictError("Account already exists with this email")
            if user.google_id and other.google_id == user.google_id:
                raise ConflictError("Google account already linked")
            if user.apple_id and other.apple_id == user.apple_id:
                raise ConflictError("Apple account already linked")

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        email = email.strip().lower()
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_provider_id(
        self, provider: AuthMethod, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by Google or Apple subject identifier."""
        for user in self._users.values():
            if provider == AuthMethod.GOOGLE and user.google_id == provider_user_id:
                return user
            if provider == AuthMethod.APPLE and user.apple_id == provider_user_id:
                return user
        return None

    async def find_by_reset_token_hash(self, token_hash: str) -> Optional[User]:
        """Find a user holding a password reset token."""
        for user in self._users.values():
            if user.password_reset_token_hash == token_hash:
                return user
        return None

    async def create(self, user: User) -> User:
        """Insert a new user, enforcing unique fields."""
        if user.id in self._users:
            raise ConflictError(f"User {user.id} already exists")
        self._check_unique(user)
        self._users[user.id] = user
        return user

    async def update(self, user_id: UserId, mutate: UserMutation) -> User:
        """Read-modify-write one user under its lock."""
        async with self._locks[user_id]:
            current = self._users.get(user_id)
            if current is None:
                raise NotFoundError("User", str(user_id))
            # Yield so concurrent callers actually queue on the lock
            await asyncio.sleep(0)
            updated = mutate(current).model_copy(
                update={"updated_at": datetime.now(timezone.utc)}
            )
            self._check_unique(updated)
            self._users[user_id] = updated
            return updated
