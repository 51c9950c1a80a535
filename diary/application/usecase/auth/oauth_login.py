"""OAuth (Google / Apple) login use cases."""

import secrets
from urllib.parse import urlencode

import logfire
from pydantic import BaseModel, Field

from diary.config import Settings
from diary.domain.service import AccountLinker, AuthService, JWTService, OAuthLogin
from diary.domain.value import AuthMethod, OAuthIdentity

from .common import AuthTokenResponse, UserInfo


class InitiateOAuthLoginUseCase:
    """Use case for starting the web redirect flow with a provider."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, provider: AuthMethod) -> str:
        """Return the provider authorization URL.

        Raises:
            ValidationError: If provider not supported
        """
        # CSRF state, checked by the provider client on callback
        state = secrets.token_urlsafe(32)
        return await self.auth_service.initiate_login(provider, state)


class OAuthCallbackRequest(BaseModel):
    """Parameters of a provider redirect back to the API."""

    provider: AuthMethod
    code: str
    state: str
    name: str | None = None  # Apple only sends the name on first authorization


class OAuthCallbackUseCase:
    """Use case for finishing the web redirect flow.

    Produces the client URL to redirect to, carrying the session token.
    Accounts that can only sign in through a provider are sent to the
    password setup screen.
    """

    def __init__(
        self,
        auth_service: AuthService,
        account_linker: AccountLinker,
        jwt_service: JWTService,
        settings: Settings,
    ) -> None:
        """Initialize OAuth callback use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            account_linker: Account linking domain service
            jwt_service: JWT token domain service
            settings: Application settings
        """
        self.auth_service = auth_service
        self.account_linker = account_linker
        self.jwt_service = jwt_service
        self.settings = settings

    async def execute(self, request: OAuthCallbackRequest) -> str:
        """Complete the provider flow and build the client redirect URL.

        Raises:
            InvalidProviderToken: If the state or code is rejected
            ValidationError: If the identity cannot be linked
            ConflictError: If the email belongs to another provider identity
        """
        identity = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )
        login = await _sign_in(self.account_linker, identity, request.name)
        token = self.jwt_service.create_token(login.user.id)

        params = {"token": token}
        if login.user.is_oauth_only:
            params["action"] = "set-password"

        return f"{self.settings.api.client_url}/auth/callback?{urlencode(params)}"


class IdTokenLoginRequest(BaseModel):
    """ID token sent by a native client after provider sign-in."""

    id_token: str = Field(min_length=1)
    name: str | None = Field(default=None, max_length=100)


class IdTokenLoginUseCase:
    """Use case for native sign-in with a provider ID token."""

    def __init__(
        self,
        auth_service: AuthService,
        account_linker: AccountLinker,
        jwt_service: JWTService,
    ) -> None:
        self.auth_service = auth_service
        self.account_linker = account_linker
        self.jwt_service = jwt_service

    async def execute(
        self, provider: AuthMethod, request: IdTokenLoginRequest
    ) -> AuthTokenResponse:
        """Verify the ID token and sign the user in.

        Raises:
            InvalidProviderToken: If the provider rejects the token
            ValidationError: If the identity cannot be linked
            ConflictError: If the email belongs to another provider identity
        """
        identity = await self.auth_service.verify_id_token(provider, request.id_token)
        login = await _sign_in(self.account_linker, identity, request.name)
        token = self.jwt_service.create_token(login.user.id)
        return AuthTokenResponse(token=token, user=UserInfo.from_user(login.user))


async def _sign_in(
    account_linker: AccountLinker, identity: OAuthIdentity, name: str | None
) -> OAuthLogin:
    if name and name.strip() and not identity.name:
        identity = identity.model_copy(update={"name": name.strip()})

    login = await account_linker.sign_in_with_provider(identity)
    logfire.info(
        "OAuth login completed",
        user_id=str(login.user.id),
        provider=identity.provider.value,
        created=login.created,
        linked=login.linked,
    )
    return login
