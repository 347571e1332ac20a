"""Payment infrastructure providers."""

from collections.abc import AsyncIterator

import stripe
from dishka import Scope, provide

from together.adapter.payment.client import StripePaymentClient
from together.config import Settings
from together.domain.service import PaymentClient
from together.util.di.base import ProviderBase
from together.util.error import ConfigurationError


class PaymentProvider(ProviderBase):
    """Payment component base."""

    __mock_component__ = "payment"


class ProdPaymentProvider(PaymentProvider):
    """Production payment provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_payment_client(self, settings: Settings) -> AsyncIterator[PaymentClient]:
        """Provide the Stripe-backed client; its HTTP pool closes with the app.

        Raises:
            ConfigurationError: If no secret key is configured
        """
        if not settings.payment.secret_key:
            raise ConfigurationError("PAYMENT__SECRET_KEY is required for payments")
        http_client = stripe.HTTPXClient(timeout=settings.platform.timeout)
        client = stripe.StripeClient(
            settings.payment.secret_key,
            base_addresses={"api": settings.payment.api_base},
            http_client=http_client,
        )
        yield StripePaymentClient(client)
        await http_client.close_async()
