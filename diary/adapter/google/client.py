"""Google OAuth 2.0 / OpenID Connect client implementation.

Web sign-in uses the authorization code flow; native apps send an ID token
which is checked with Google's tokeninfo endpoint.
"""

import time
from urllib.parse import urlencode

import httpx
import logfire

from diary.adapter.error import InvalidProviderToken, ProviderError
from diary.adapter.state import PendingStates
from diary.domain.service.auth_service import OAuthClient
from diary.domain.value import AuthMethod, OAuthIdentity

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth client talking to Google's endpoints over httpx."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        extra_audiences: list[str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth web client ID
            client_secret: Google OAuth web client secret
            redirect_uri: Callback URL registered with Google
            extra_audiences: Other client IDs (Android/iOS) accepted in ID tokens
            timeout: Timeout in seconds for calls to Google
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.audiences = {client_id, *(extra_audiences or [])}
        self.timeout = timeout

        self.authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
        self.token_url = "https://oauth2.googleapis.com/token"
        self.tokeninfo_url = "https://oauth2.googleapis.com/tokeninfo"

        self._states = PendingStates()

    async def initiate_authorization(self, state: str) -> str:
        """Build the Google consent URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._states.add(state)

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "openid email profile",
            "state": state,
            "prompt": "select_account",
        }

        logfire.info("Google OAuth authorization initiated", redirect_uri=self.redirect_uri)
        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> OAuthIdentity:
        """Exchange the callback code and verify the returned ID token.

        Raises:
            InvalidProviderToken: If the state is unknown/expired or Google rejects the code
            ProviderError: If Google cannot be reached
        """
        if not self._states.consume(state):
            raise InvalidProviderToken("Invalid or expired OAuth state")

        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.token_url, data=data)
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise ProviderError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise InvalidProviderToken(f"Token exchange failed: {response.status_code}")

        id_token = response.json().get("id_token")
        if not id_token:
            raise ProviderError("Google token response did not include an ID token")

        return await self.verify_id_token(id_token)

    async def verify_id_token(self, id_token: str) -> OAuthIdentity:
        """Verify a Google ID token via the tokeninfo endpoint.

        Raises:
            InvalidProviderToken: If the token is invalid, expired or for another app
            ProviderError: If Google cannot be reached
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.tokeninfo_url, params={"id_token": id_token}
                )
        except httpx.HTTPError as e:
            logfire.error("Google tokeninfo HTTP error", error=str(e))
            raise ProviderError(f"HTTP error verifying ID token: {e}")

        if response.status_code == 400:
            raise InvalidProviderToken("Invalid Google ID token")
        if response.status_code != 200:
            logfire.error("Google tokeninfo failed", status_code=response.status_code)
            raise ProviderError(f"Token verification failed: {response.status_code}")

        claims = response.json()

        if claims.get("aud") not in self.audiences:
            logfire.warn("Google ID token for another audience", aud=claims.get("aud"))
            raise InvalidProviderToken("Google ID token was issued for another app")
        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise InvalidProviderToken("Google ID token has an unexpected issuer")
        if int(claims.get("exp", 0)) < time.time():
            raise InvalidProviderToken("Google ID token has expired")

        logfire.info("Google ID token verified", sub=claims["sub"])

        return OAuthIdentity(
            provider=AuthMethod.GOOGLE,
            provider_user_id=claims["sub"],
            email=claims.get("email"),
            email_verified=str(claims.get("email_verified", "")).lower() == "true",
            name=claims.get("name"),
            avatar_url=claims.get("picture"),
        )


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    ID tokens and authorization codes are looked up in ``identities``;
    anything unregistered is rejected as an invalid token.
    """

    def __init__(self) -> None:
        """Initialize mock client without real OAuth configuration."""
        self.identities: dict[str, OAuthIdentity] = {}

    def register(self, token: str, identity: OAuthIdentity) -> None:
        """Make ``token`` (an ID token or authorization code) resolve to ``identity``."""
        self.identities[token] = identity

    async def initiate_authorization(self, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthIdentity:
        return await self.verify_id_token(code)

    async def verify_id_token(self, id_token: str) -> OAuthIdentity:
        identity = self.identities.get(id_token)
        if identity is None:
            raise InvalidProviderToken("Invalid Google ID token")
        return identity
