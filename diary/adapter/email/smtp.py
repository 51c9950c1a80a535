"""SMTP email client.

smtplib is blocking, so delivery runs in a worker thread.
"""

import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from diary.adapter.error import EmailDeliveryError
from diary.config import EmailSettings
from diary.domain.service.email_service import EmailClient

logger = logging.getLogger(__name__)


class SmtpEmailClient(EmailClient):
    """Sends email through an SMTP server (implicit TLS, STARTTLS or plain)."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize SMTP client.

        Args:
            settings: SMTP connection and sender settings
        """
        self._settings = settings

    def _create_message(
        self, to_email: str, subject: str, text_body: str, html_body: str
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.from_name} <{self._settings.from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_sync(self, message: MIMEMultipart) -> None:
        settings = self._settings
        password = settings.password.get_secret_value() if settings.password else ""

        if settings.use_tls and not settings.starttls:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                settings.host, settings.port, context=context, timeout=settings.timeout
            ) as server:
                if settings.user:
                    server.login(settings.user, password)
                server.send_message(message)
        else:
            # STARTTLS (port 587) or plain
            with smtplib.SMTP(
                settings.host, settings.port, timeout=settings.timeout
            ) as server:
                if settings.starttls:
                    server.starttls(context=ssl.create_default_context())
                if settings.user:
                    server.login(settings.user, password)
                server.send_message(message)

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """Send one message.

        When email is disabled the message is dropped with a warning.

        Raises:
            EmailDeliveryError: If the SMTP server is missing or rejects the message
        """
        if not self._settings.enabled:
            logger.warning("SMTP disabled, email %r not sent", subject)
            return

        if not self._settings.host:
            logger.error("SMTP host not configured")
            raise EmailDeliveryError("SMTP host not configured")

        message = self._create_message(to, subject, text, html)
        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email %r: %s", subject, e)
            raise EmailDeliveryError(f"Failed to send email: {e}")

        logger.info("Email %r sent", subject)


@dataclass(frozen=True)
class SentEmail:
    to: str
    subject: str
    html: str
    text: str


class MockEmailClient(EmailClient):
    """Mock email client recording messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []
        self.fail = False  # Set to True to simulate delivery failures

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        if self.fail:
            raise EmailDeliveryError("Simulated delivery failure")
        self.sent.append(SentEmail(to=to, subject=subject, html=html, text=text))

    def last_to(self, to: str) -> SentEmail | None:
        """Most recent message sent to an address."""
        for message in reversed(self.sent):
            if message.to == to:
                return message
        return None
