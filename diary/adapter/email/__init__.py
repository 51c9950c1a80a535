"""Outbound email adapter."""

from .smtp import MockEmailClient, SentEmail, SmtpEmailClient

__all__ = ["MockEmailClient", "SentEmail", "SmtpEmailClient"]
