"""Mock Apple providers for testing."""

from dishka import Scope, provide

from diary.adapter.apple.client import AppleOAuthClient, MockAppleOAuthClient
from diary.util.di.infrastructure.apple import AppleProvider


class MockAppleProvider(AppleProvider):
    """Mock Apple provider using mock OAuth client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_apple_oauth_client(self) -> AppleOAuthClient:
        """Provide mock Sign in with Apple client."""
        return MockAppleOAuthClient()
