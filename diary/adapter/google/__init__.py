"""Google sign-in adapter."""

from .client import (
    GoogleOAuthClient,
    MockGoogleOAuthClient,
    RealGoogleOAuthClient,
)

__all__ = ["GoogleOAuthClient", "MockGoogleOAuthClient", "RealGoogleOAuthClient"]
