"""Verify purchase use case."""

from pydantic import BaseModel, Field

from diary.domain.service import PurchaseService
from diary.domain.value import Platform, UserId


class VerifyPurchaseRequest(BaseModel):
    """Store purchase sent by the mobile client."""

    platform: Platform
    product_id: str = Field(min_length=1)
    purchase_token: str = Field(min_length=1)
    transaction_id: str | None = None


class VerifyPurchaseResponse(BaseModel):
    """Verify purchase response."""

    is_premium: bool
    message: str


class VerifyPurchaseUseCase:
    """Use case for upgrading a user after a store purchase."""

    def __init__(self, purchase_service: PurchaseService) -> None:
        """Initialize verify purchase use case.

        Args:
            purchase_service: Purchase domain service
        """
        self.purchase_service = purchase_service

    async def execute(
        self, user_id: UserId, request: VerifyPurchaseRequest
    ) -> VerifyPurchaseResponse:
        """Verify the receipt and grant premium.

        Raises:
            ValidationError: If the product is unknown or the receipt is rejected
        """
        user = await self.purchase_service.verify_purchase(
            user_id,
            request.platform,
            request.product_id,
            request.purchase_token,
            request.transaction_id,
        )
        return VerifyPurchaseResponse(
            is_premium=user.is_premium, message="Purchase verified successfully"
        )
