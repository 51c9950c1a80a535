"""Provider mapping each sign-in method to its OAuth client."""

from dishka import Scope, provide

from diary.adapter.apple.client import AppleOAuthClient
from diary.adapter.google.client import GoogleOAuthClient
from diary.domain.service.auth_service import OAuthClient
from diary.domain.value import AuthMethod
from diary.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Collects the Google and Apple clients for ``AuthService``.

    The clients themselves come from the mockable Google/Apple providers,
    so this mapping picks up mocks in tests without a mock of its own.
    """

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self, google: GoogleOAuthClient, apple: AppleOAuthClient
    ) -> dict[AuthMethod, OAuthClient]:
        # AuthMethod.EMAIL has no client; looking it up is a programming error
        return {AuthMethod.GOOGLE: google, AuthMethod.APPLE: apple}
