"""User repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

from diary.domain.model.user import User
from diary.domain.value import AuthMethod, UserId

UserMutation = Callable[[User], User]


class UserRepository(ABC):
    """Repository for the User aggregate.

    Every write is committed on its own, independently of the request that
    triggered it, so counters such as failed login or OTP attempts persist
    even when the surrounding operation ends in an error.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their (normalized) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_id(
        self, provider: AuthMethod, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by an external provider's subject identifier.

        Args:
            provider: GOOGLE or APPLE
            provider_user_id: The user's ID on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_reset_token_hash(self, token_hash: str) -> Optional[User]:
        """Find the user holding a password reset token.

        Args:
            token_hash: SHA-256 hex digest of the reset token

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The stored user

        Raises:
            ConflictError: If email or a provider id is already taken
        """
        pass

    @abstractmethod
    async def update(self, user_id: UserId, mutate: UserMutation) -> User:
        """Atomically read, modify and write one user.

        The current record is loaded under a per-user lock, passed to
        ``mutate`` and the returned copy is stored with a fresh
        ``updated_at``. Concurrent updates to the same user are serialized.

        Args:
            user_id: The user to update
            mutate: Pure function producing the new state from the current one

        Returns:
            The stored user

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the change collides with another user's unique field
        """
        pass
