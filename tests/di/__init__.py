"""Mock providers for testing."""

from .apple import MockAppleProvider
from .email import MockEmailProvider
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider
from .purchase import MockPurchaseProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockAppleProvider",
    "MockEmailProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "MockPurchaseProvider",
    "MockStorageProvider",
    "build_test_container",
]
