"""Mock providers for testing."""

from .container import build_test_container
from .payment import MockPaymentProvider
from .persistence import MockPersistenceProvider
from .platform import MockPlatformProvider

__all__ = [
    "MockPaymentProvider",
    "MockPersistenceProvider",
    "MockPlatformProvider",
    "build_test_container",
]
