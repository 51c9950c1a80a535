"""Purchase use cases."""

from .verify_purchase import VerifyPurchaseUseCase

__all__ = ["VerifyPurchaseUseCase"]
