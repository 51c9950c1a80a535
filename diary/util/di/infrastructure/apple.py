"""Apple infrastructure providers."""

from dishka import Scope, provide

from diary.adapter.apple.client import AppleOAuthClient, RealAppleOAuthClient
from diary.config import Settings
from diary.util.di.base import ProviderBase


class AppleProvider(ProviderBase):
    """Apple component base."""

    __mock_component__ = "apple"


class ProdAppleProvider(AppleProvider):
    """Production Apple provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_apple_oauth_client(self, settings: Settings) -> AppleOAuthClient:
        """Provide Sign in with Apple client."""
        return RealAppleOAuthClient(
            settings=settings.auth.apple,
            redirect_uri=settings.auth.apple_callback_url,
            timeout=settings.auth.provider_timeout,
        )
