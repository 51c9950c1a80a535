"""Sign in with Apple client implementation.

Apple signs its ID tokens with rotating RS256 keys published as a JWKS.
Code exchange requires a short-lived ES256 client secret signed with the
team's private key.
"""

import time
from urllib.parse import urlencode

import httpx
import jwt
import logfire

from diary.adapter.error import InvalidProviderToken, ProviderError
from diary.adapter.state import PendingStates
from diary.config import AppleOAuthSettings
from diary.domain.service.auth_service import OAuthClient
from diary.domain.value import AuthMethod, OAuthIdentity

APPLE_ISSUER = "https://appleid.apple.com"

# Refetch Apple's signing keys at most this often (unless a kid is unknown)
JWKS_TTL_SECONDS = 3600


class AppleOAuthClient(OAuthClient):
    """Base class for Apple OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealAppleOAuthClient(AppleOAuthClient):
    """Sign in with Apple client using httpx and PyJWT."""

    def __init__(
        self,
        settings: AppleOAuthSettings,
        redirect_uri: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Apple OAuth client.

        Args:
            settings: Apple team, key and client identifiers
            redirect_uri: Callback URL registered with Apple
            timeout: Timeout in seconds for calls to Apple
        """
        self.settings = settings
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.audiences = [settings.client_id, *settings.extra_audiences]

        self.authorize_url = f"{APPLE_ISSUER}/auth/authorize"
        self.token_url = f"{APPLE_ISSUER}/auth/token"
        self.keys_url = f"{APPLE_ISSUER}/auth/keys"

        self._states = PendingStates()
        self._jwks: jwt.PyJWKSet | None = None
        self._jwks_fetched_at = 0.0

    async def initiate_authorization(self, state: str) -> str:
        """Build the Apple authorization URL (form_post response mode)."""
        self._states.add(state)

        params = {
            "response_type": "code",
            "response_mode": "form_post",
            "client_id": self.settings.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "name email",
            "state": state,
        }

        logfire.info("Apple OAuth authorization initiated", redirect_uri=self.redirect_uri)
        return f"{self.authorize_url}?{urlencode(params)}"

    def _client_secret(self) -> str:
        """Sign the ES256 client secret Apple expects at the token endpoint."""
        now = int(time.time())
        payload = {
            "iss": self.settings.team_id,
            "iat": now,
            "exp": now + 300,
            "aud": APPLE_ISSUER,
            "sub": self.settings.client_id,
        }
        return jwt.encode(
            payload,
            self.settings.private_key.get_secret_value(),
            algorithm="ES256",
            headers={"kid": self.settings.key_id},
        )

    async def complete_authorization(self, code: str, state: str) -> OAuthIdentity:
        """Exchange the callback code and verify the returned ID token.

        Raises:
            InvalidProviderToken: If the state is unknown/expired or Apple rejects the code
            ProviderError: If Apple cannot be reached
        """
        if not self._states.consume(state):
            raise InvalidProviderToken("Invalid or expired OAuth state")

        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
            "client_id": self.settings.client_id,
            "client_secret": self._client_secret(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.token_url, data=data)
        except httpx.HTTPError as e:
            logfire.error("Apple token exchange HTTP error", error=str(e))
            raise ProviderError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Apple token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise InvalidProviderToken(f"Token exchange failed: {response.status_code}")

        id_token = response.json().get("id_token")
        if not id_token:
            raise ProviderError("Apple token response did not include an ID token")

        return await self.verify_id_token(id_token)

    async def _signing_keys(self, refresh: bool = False) -> jwt.PyJWKSet:
        stale = time.monotonic() - self._jwks_fetched_at > JWKS_TTL_SECONDS
        if self._jwks is None or stale or refresh:
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.keys_url)
                    response.raise_for_status()
            except httpx.HTTPError as e:
                logfire.error("Apple JWKS fetch failed", error=str(e))
                raise ProviderError(f"Could not fetch Apple signing keys: {e}")
            self._jwks = jwt.PyJWKSet.from_dict(response.json())
            self._jwks_fetched_at = time.monotonic()
        return self._jwks

    async def _key_for(self, kid: str) -> jwt.PyJWK:
        for refresh in (False, True):
            keys = await self._signing_keys(refresh=refresh)
            for key in keys.keys:
                if key.key_id == kid:
                    return key
        raise InvalidProviderToken("Apple ID token signed with an unknown key")

    async def verify_id_token(self, id_token: str) -> OAuthIdentity:
        """Verify an Apple ID token against Apple's published keys.

        Raises:
            InvalidProviderToken: If the token is malformed, expired, mis-signed
                or issued for another app
            ProviderError: If Apple's keys cannot be fetched
        """
        try:
            kid = jwt.get_unverified_header(id_token).get("kid")
        except jwt.InvalidTokenError:
            raise InvalidProviderToken("Malformed Apple ID token")
        if not kid:
            raise InvalidProviderToken("Apple ID token has no key id")

        key = await self._key_for(kid)

        try:
            claims = jwt.decode(
                id_token,
                key.key,
                algorithms=["RS256"],
                audience=self.audiences,
                issuer=APPLE_ISSUER,
            )
        except jwt.InvalidTokenError as e:
            logfire.warn("Apple ID token rejected", error=str(e))
            raise InvalidProviderToken(f"Invalid Apple ID token: {e}")

        logfire.info("Apple ID token verified", sub=claims["sub"])

        # Apple sends booleans as either JSON booleans or strings
        email_verified = str(claims.get("email_verified", "")).lower() == "true"

        return OAuthIdentity(
            provider=AuthMethod.APPLE,
            provider_user_id=claims["sub"],
            email=claims.get("email"),
            email_verified=email_verified,
        )


class MockAppleOAuthClient(AppleOAuthClient):
    """Mock Apple OAuth client for testing.

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
        return f"{APPLE_ISSUER}/auth/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthIdentity:
        return await self.verify_id_token(code)

    async def verify_id_token(self, id_token: str) -> OAuthIdentity:
        identity = self.identities.get(id_token)
        if identity is None:
            raise InvalidProviderToken("Invalid Apple ID token")
        return identity
