"""Purchase verification domain service."""

import logfire

from diary.domain.error import ValidationError
from diary.domain.model import User
from diary.domain.value import Platform, UserId

from .base import Service
from .user_service import UserService


class ReceiptVerifier:
    """Store receipt verification interface (Google Play, App Store)."""

    async def verify(
        self,
        platform: Platform,
        product_id: str,
        purchase_token: str,
        transaction_id: str | None = None,
    ) -> bool:
        """Check a purchase with the store.

        Returns:
            True if the store confirms an active purchase
        """
        raise NotImplementedError


class PurchaseService(Service):
    """Grants premium access for verified store purchases."""

    def __init__(
        self,
        user_service: UserService,
        receipt_verifier: ReceiptVerifier,
        product_ids: list[str],
    ) -> None:
        """Initialize purchase service.

        Args:
            user_service: User domain service
            receipt_verifier: Store receipt verifier
            product_ids: Product identifiers that grant premium
        """
        self.user_service = user_service
        self.receipt_verifier = receipt_verifier
        self.product_ids = product_ids

    async def verify_purchase(
        self,
        user_id: UserId,
        platform: Platform,
        product_id: str,
        purchase_token: str,
        transaction_id: str | None = None,
    ) -> User:
        """Verify a purchase and mark the user premium.

        Raises:
            ValidationError: If the product is unknown or the store rejects the receipt
            NotFoundError: If the user does not exist
        """
        with logfire.span(
            "purchase_service.verify_purchase",
            user_id=str(user_id),
            platform=platform.value,
            product_id=product_id,
        ):
            if product_id not in self.product_ids:
                raise ValidationError("Invalid product ID")

            valid = await self.receipt_verifier.verify(
                platform, product_id, purchase_token, transaction_id
            )
            if not valid:
                logfire.warn("Purchase verification failed", user_id=str(user_id))
                raise ValidationError("Purchase verification failed")

            user = await self.user_service.update(
                user_id, lambda u: u.model_copy(update={"is_premium": True})
            )
            logfire.info("User upgraded to premium", user_id=str(user_id))
            return user
