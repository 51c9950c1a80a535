"""Infrastructure layer errors."""

from diary.domain.error import DependencyError


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External identity provider error (network, unexpected response)."""

    pass


class InvalidProviderToken(ProviderError):
    """Raised when a provider rejects a token, code or OAuth state."""

    pass


class EmailDeliveryError(AdapterError, DependencyError):
    """Raised when an email could not be handed to the mail server."""

    pass


class StorageError(AdapterError, DependencyError):
    """Raised when media storage fails."""

    pass
