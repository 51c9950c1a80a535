"""Authentication domain service."""

import logfire

from diary.domain.error import ValidationError
from diary.domain.value import AuthMethod, OAuthIdentity

from .base import Service


class OAuthClient:
    """Generic OAuth / OpenID Connect client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> OAuthIdentity:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Verified provider identity
        """
        raise NotImplementedError

    async def verify_id_token(self, id_token: str) -> OAuthIdentity:
        """Verify an ID token obtained by a native client.

        Args:
            id_token: OpenID Connect ID token

        Returns:
            Verified provider identity
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider authentication operations.

    Coordinates authentication across the OAuth providers (Google, Apple).
    """

    def __init__(self, oauth_clients: dict[AuthMethod, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthMethod) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ValidationError(f"Unsupported provider: {provider.value}")
        return client

    async def initiate_login(self, provider: AuthMethod, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: Authentication provider to use
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            ValidationError: If provider not supported
        """
        with logfire.span("auth_service.initiate_login", provider=provider.value):
            return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthMethod, code: str, state: str
    ) -> OAuthIdentity:
        """Complete OAuth login flow for any provider.

        Args:
            provider: Authentication provider used
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Verified provider identity

        Raises:
            ValidationError: If provider not supported
        """
        with logfire.span("auth_service.complete_login", provider=provider.value):
            return await self._client(provider).complete_authorization(code, state)

    async def verify_id_token(self, provider: AuthMethod, id_token: str) -> OAuthIdentity:
        """Verify a provider ID token sent by a native client.

        Raises:
            ValidationError: If provider not supported
        """
        with logfire.span("auth_service.verify_id_token", provider=provider.value):
            return await self._client(provider).verify_id_token(id_token)
