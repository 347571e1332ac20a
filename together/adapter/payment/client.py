"""Payment provider adapter."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import stripe

from together.adapter.error import PaymentProviderError
from together.domain.model.subscription import CheckoutSession, ProviderSubscription
from together.domain.service.subscription_service import PaymentClient
from together.domain.value import SubscriptionStatus

logger = logging.getLogger(__name__)


def _from_epoch(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def _subscription_from_object(subscription: Any) -> ProviderSubscription:
    return ProviderSubscription(
        id=subscription["id"],
        customer=subscription["customer"],
        status=SubscriptionStatus(subscription["status"]),
        current_period_start=_from_epoch(subscription.get("current_period_start")),
        current_period_end=_from_epoch(subscription.get("current_period_end")),
        cancel_at_period_end=bool(subscription.get("cancel_at_period_end", False)),
    )


def _provider_error(action: str, error: stripe.StripeError) -> PaymentProviderError:
    message = error.user_message or str(error)
    logger.error(f"Payment provider {action} failed: {message}")
    return PaymentProviderError(message, error.http_status)


class StripePaymentClient(PaymentClient):
    """Payment client over the Stripe SDK's async API."""

    def __init__(self, client: stripe.StripeClient) -> None:
        """Initialize payment client.

        Args:
            client: Stripe client configured with the secret key
        """
        self.client = client

    async def retrieve_subscription(self, subscription_id: str) -> ProviderSubscription:
        try:
            subscription = await self.client.subscriptions.retrieve_async(
                subscription_id
            )
        except stripe.StripeError as e:
            raise _provider_error("subscription retrieve", e)
        return _subscription_from_object(subscription)

    async def create_customer(self, email: str, user_id: str) -> str:
        try:
            customer = await self.client.customers.create_async(
                params={"email": email, "metadata": {"userId": user_id}}
            )
        except stripe.StripeError as e:
            raise _provider_error("customer create", e)
        return customer.id

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        user_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = await self.client.checkout.sessions.create_async(
                params={
                    "customer": customer_id,
                    "mode": "subscription",
                    "payment_method_types": ["card"],
                    "line_items": [{"price": price_id, "quantity": 1}],
                    "success_url": success_url,
                    "cancel_url": cancel_url,
                    "metadata": {"userId": user_id},
                }
            )
        except stripe.StripeError as e:
            raise _provider_error("checkout session create", e)
        return CheckoutSession(id=session.id, url=session.url)

    async def set_cancel_at_period_end(
        self, subscription_id: str, cancel: bool
    ) -> ProviderSubscription:
        try:
            subscription = await self.client.subscriptions.update_async(
                subscription_id, params={"cancel_at_period_end": cancel}
            )
        except stripe.StripeError as e:
            raise _provider_error("subscription update", e)
        return _subscription_from_object(subscription)


# Mock implementation for testing
class MockPaymentClient(PaymentClient):
    """In-memory payment provider.

    Subscriptions can be seeded through ``subscriptions`` before a webhook
    references them.
    """

    def __init__(self) -> None:
        self.customers: dict[str, dict[str, str]] = {}
        self.subscriptions: dict[str, ProviderSubscription] = {}
        self.checkout_sessions: list[dict[str, str]] = []

    async def retrieve_subscription(self, subscription_id: str) -> ProviderSubscription:
        subscription = self.subscriptions.get(subscription_id)
        if subscription is None:
            raise PaymentProviderError(f"No such subscription: {subscription_id}", 404)
        return subscription

    async def create_customer(self, email: str, user_id: str) -> str:
        customer_id = f"cus_{uuid4().hex[:14]}"
        self.customers[customer_id] = {"email": email, "user_id": user_id}
        return customer_id

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        user_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        session_id = f"cs_test_{uuid4().hex[:24]}"
        self.checkout_sessions.append(
            {"id": session_id, "customer": customer_id, "price": price_id}
        )
        return CheckoutSession(
            id=session_id, url=f"https://checkout.example.test/{session_id}"
        )

    async def set_cancel_at_period_end(
        self, subscription_id: str, cancel: bool
    ) -> ProviderSubscription:
        current = await self.retrieve_subscription(subscription_id)
        updated = current.model_copy(update={"cancel_at_period_end": cancel})
        self.subscriptions[subscription_id] = updated
        return updated
