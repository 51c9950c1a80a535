"""Configuration providers (never mocked)."""

from dishka import Scope, from_context, provide

from diary.config import AuthSettings, EmailSettings, Settings, StorageSettings
from diary.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Exposes the settings passed to the container and their sections.

    ``Settings`` itself comes from the container context so the app and
    the container always share one loaded configuration.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        return settings.email

    @provide(scope=Scope.APP)
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        """Media storage section, also read by the ``/media`` mount."""
        return settings.storage
