"""Sign in with Apple adapter."""

from .client import AppleOAuthClient, MockAppleOAuthClient, RealAppleOAuthClient

__all__ = ["AppleOAuthClient", "MockAppleOAuthClient", "RealAppleOAuthClient"]
