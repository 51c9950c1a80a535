"""Email infrastructure providers."""

from dishka import Scope, provide

from diary.adapter.email.smtp import SmtpEmailClient
from diary.config import EmailSettings
from diary.domain.service import EmailClient
from diary.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider (SMTP)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_client(self, email_settings: EmailSettings) -> EmailClient:
        return SmtpEmailClient(email_settings)
