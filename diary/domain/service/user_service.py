"""User domain service."""

import logfire

from diary.domain.error import NotFoundError
from diary.domain.model import User
from diary.domain.repository import UserMutation, UserRepository
from diary.domain.value import AuthMethod, UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups and single-user updates."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: User email (normalized by the caller)

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email"):
            return await self.user_repository.find_by_email(email)

    async def get_user_by_provider_id(
        self, provider: AuthMethod, provider_user_id: str
    ) -> User | None:
        """Get user by OAuth provider subject.

        Args:
            provider: GOOGLE or APPLE
            provider_user_id: Provider-specific user ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span(
            "user_service.get_user_by_provider_id", provider=provider.value
        ):
            return await self.user_repository.find_by_provider_id(
                provider, provider_user_id
            )

    async def get_user_by_reset_token(self, token_hash: str) -> User | None:
        """Get the user holding a password reset token digest."""
        with logfire.span("user_service.get_user_by_reset_token"):
            return await self.user_repository.find_by_reset_token_hash(token_hash)

    async def create(self, user: User) -> User:
        """Create a new user.

        Raises:
            ConflictError: If the email or a provider id is already taken
        """
        with logfire.span("user_service.create", user_id=str(user.id)):
            created = await self.user_repository.create(user)
            logfire.info(
                "User created",
                user_id=str(user.id),
                auth_methods=sorted(m.value for m in user.auth_methods),
            )
            return created

    async def update(self, user_id: UserId, mutate: UserMutation) -> User:
        """Atomically apply a change to one user.

        Args:
            user_id: User ID
            mutate: Function producing the new state from the current one

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.update", user_id=str(user_id)):
            return await self.user_repository.update(user_id, mutate)
