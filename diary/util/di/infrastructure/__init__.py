"""Infrastructure providers."""

# Import bases
from .apple import AppleProvider
from .email import EmailProvider
from .google import GoogleProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider
from .purchase import PurchaseProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .apple import ProdAppleProvider  # noqa: F401
from .email import ProdEmailProvider  # noqa: F401
from .google import ProdGoogleProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .purchase import ProdPurchaseProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "AppleProvider",
    "EmailProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdAppleProvider",
    "ProdEmailProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
    "ProdPurchaseProvider",
    "ProdStorageProvider",
    "PurchaseProvider",
    "StorageProvider",
]
