"""Store receipt verification adapter."""

from .receipt import MockReceiptVerifier, StubReceiptVerifier

__all__ = ["MockReceiptVerifier", "StubReceiptVerifier"]
