"""Email domain service."""

from html import escape

import logfire

from .base import Service


class EmailClient:
    """Outbound email transport interface."""

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """Send one message.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
            text: Plain text alternative

        Raises:
            EmailDeliveryError: If the message could not be handed to the server
        """
        raise NotImplementedError


class EmailService(Service):
    """Composes and sends the application's transactional emails."""

    def __init__(
        self, email_client: EmailClient, support_address: str, client_url: str
    ) -> None:
        """Initialize email service.

        Args:
            email_client: Transport used to deliver messages
            support_address: Inbox receiving support requests
            client_url: Web client base URL used in emailed links
        """
        self.email_client = email_client
        self.support_address = support_address
        self.client_url = client_url

    async def send_otp(self, to: str, name: str, code: str, ttl_minutes: int) -> None:
        """Send an email verification code."""
        with logfire.span("email_service.send_otp"):
            subject = "Your DiaryFi verification code"
            text = (
                f"Hi {name},\n\nYour verification code is {code}.\n"
                f"It expires in {ttl_minutes} minutes.\n\n"
                "If you did not request this, you can ignore this email."
            )
            html = (
                f"<p>Hi {escape(name)},</p>"
                f"<p>Your verification code is</p>"
                f"<h2 style=\"letter-spacing:8px\">{escape(code)}</h2>"
                f"<p>It expires in {ttl_minutes} minutes.</p>"
                "<p>If you did not request this, you can ignore this email.</p>"
            )
            await self.email_client.send(to, subject, html, text)

    async def send_temporary_password(self, to: str, name: str, password: str) -> None:
        """Send a temporary password after a forgot-password request."""
        with logfire.span("email_service.send_temporary_password"):
            subject = "Your DiaryFi temporary password"
            text = (
                f"Hi {name},\n\nYour temporary password is {password}.\n"
                "Sign in with it and change your password from the app settings."
            )
            html = (
                f"<p>Hi {escape(name)},</p>"
                f"<p>Your temporary password is <strong>{escape(password)}</strong>.</p>"
                "<p>Sign in with it and change your password from the app settings.</p>"
            )
            await self.email_client.send(to, subject, html, text)

    async def send_password_setup_link(self, to: str, token: str) -> None:
        """Send a link that lets an OAuth-only account set a password."""
        with logfire.span("email_service.send_password_setup_link"):
            link = f"{self.client_url}/setup-password?token={token}"
            subject = "Set up your DiaryFi password"
            text = (
                "Use the link below to set a password for your account. "
                f"It expires in one hour.\n\n{link}"
            )
            html = (
                "<p>Use the link below to set a password for your account. "
                "It expires in one hour.</p>"
                f"<p><a href=\"{escape(link, quote=True)}\">Set up password</a></p>"
            )
            await self.email_client.send(to, subject, html, text)

    async def send_support_message(
        self, name: str, email: str, subject: str, message: str
    ) -> None:
        """Forward a support form message to the support inbox.

        User-supplied fields are HTML-escaped.
        """
        with logfire.span("email_service.send_support_message"):
            text = f"From: {name} <{email}>\n\n{message}"
            html = (
                f"<p><strong>From:</strong> {escape(name)} &lt;{escape(email)}&gt;</p>"
                f"<p><strong>Subject:</strong> {escape(subject)}</p>"
                f"<p>{escape(message).replace(chr(10), '<br>')}</p>"
            )
            await self.email_client.send(
                self.support_address, f"[Support] {subject}", html, text
            )
