"""Purchase verification infrastructure providers."""

from dishka import Scope, provide

from diary.adapter.purchase.receipt import StubReceiptVerifier
from diary.domain.service import ReceiptVerifier
from diary.util.di.base import ProviderBase


class PurchaseProvider(ProviderBase):
    """Purchase component base."""

    __mock_component__ = "purchase"


class ProdPurchaseProvider(PurchaseProvider):
    """Production purchase provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_receipt_verifier(self) -> ReceiptVerifier:
        return StubReceiptVerifier()
