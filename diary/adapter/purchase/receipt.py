"""Store receipt verifiers.

Receipts are not checked with Google Play or the App Store yet: the stub
accepts every purchase and logs a warning so it is visible in production.
"""

import logfire

from diary.domain.service.purchase_service import ReceiptVerifier
from diary.domain.value import Platform


class StubReceiptVerifier(ReceiptVerifier):
    """Accepts every receipt."""

    async def verify(
        self,
        platform: Platform,
        product_id: str,
        purchase_token: str,
        transaction_id: str | None = None,
    ) -> bool:
        logfire.warn(
            "Receipt verification not implemented, accepting purchase",
            platform=platform.value,
            product_id=product_id,
            transaction_id=transaction_id,
        )
        return True


class MockReceiptVerifier(ReceiptVerifier):
    """Receipt verifier with a configurable answer, for testing."""

    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.calls: list[tuple[Platform, str, str]] = []

    async def verify(
        self,
        platform: Platform,
        product_id: str,
        purchase_token: str,
        transaction_id: str | None = None,
    ) -> bool:
        self.calls.append((platform, product_id, purchase_token))
        return self.accept
