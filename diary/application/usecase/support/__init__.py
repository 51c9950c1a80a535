"""Support use cases."""

from .send_support_email import SendSupportEmailUseCase

__all__ = ["SendSupportEmailUseCase"]
