"""Mock payment providers for testing."""

from dishka import Scope, provide

from together.adapter.payment.client import MockPaymentClient
from together.domain.service import PaymentClient
from together.util.di.infrastructure.payment import PaymentProvider


class MockPaymentProvider(PaymentProvider):
    """Mock payment provider. Tests seed provider subscriptions on it."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_payment_client(self) -> PaymentClient:
        """Provide in-memory payment client."""
        return MockPaymentClient()
