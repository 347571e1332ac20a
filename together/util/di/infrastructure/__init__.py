"""Infrastructure providers."""

# Import bases
from .payment import PaymentProvider
from .persistence import PersistenceProvider
from .platform import PlatformProvider

# Import implementations (needed for __subclasses__())
from .payment import ProdPaymentProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .platform import ProdPlatformProvider  # noqa: F401

__all__ = [
    "PaymentProvider",
    "PersistenceProvider",
    "PlatformProvider",
    "ProdPaymentProvider",
    "ProdPersistenceProvider",
    "ProdPlatformProvider",
]
