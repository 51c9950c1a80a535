"""Google infrastructure providers."""

from dishka import Scope, provide

from diary.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from diary.config import Settings
from diary.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client."""
        google = settings.auth.google
        return RealGoogleOAuthClient(
            client_id=google.client_id,
            client_secret=google.client_secret,
            redirect_uri=settings.auth.google_callback_url,
            extra_audiences=google.extra_audiences,
            timeout=settings.auth.provider_timeout,
        )
