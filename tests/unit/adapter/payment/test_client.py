"""Tests for the Stripe-backed payment client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import stripe

from together.adapter.error import PaymentProviderError
from together.adapter.payment.client import StripePaymentClient
from together.domain.value import SubscriptionStatus


def _subscription(**overrides) -> dict:
    subscription = {
        "id": "sub_123",
        "customer": "cus_123",
        "status": "active",
        "current_period_start": 1_700_000_000,
        "current_period_end": 1_702_592_000,
        "cancel_at_period_end": False,
    }
    subscription.update(overrides)
    return subscription


class TestStripePaymentClient:
    """Tests for StripePaymentClient."""

    @pytest.mark.asyncio
    async def test_retrieve_subscription_maps_fields(self):
        # Arrange
        stripe_client = MagicMock()
        stripe_client.subscriptions.retrieve_async = AsyncMock(
            return_value=_subscription()
        )
        client = StripePaymentClient(stripe_client)

        # Act
        subscription = await client.retrieve_subscription("sub_123")

        # Assert
        stripe_client.subscriptions.retrieve_async.assert_awaited_once_with("sub_123")
        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.customer == "cus_123"
        assert subscription.current_period_start.year == 2023
        assert subscription.current_period_start.tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_customer_tags_user(self):
        # Arrange
        stripe_client = MagicMock()
        stripe_client.customers.create_async = AsyncMock(
            return_value=MagicMock(id="cus_new")
        )
        client = StripePaymentClient(stripe_client)

        # Act
        customer_id = await client.create_customer("carol@example.com", "u1")

        # Assert
        assert customer_id == "cus_new"
        stripe_client.customers.create_async.assert_awaited_once_with(
            params={"email": "carol@example.com", "metadata": {"userId": "u1"}}
        )

    @pytest.mark.asyncio
    async def test_checkout_session_carries_user_metadata(self):
        # Arrange
        stripe_client = MagicMock()
        stripe_client.checkout.sessions.create_async = AsyncMock(
            return_value=MagicMock(id="cs_1", url="https://checkout.test/cs_1")
        )
        client = StripePaymentClient(stripe_client)

        # Act
        session = await client.create_checkout_session(
            "cus_1", "price_monthly", "u1", "https://app/ok", "https://app/cancel"
        )

        # Assert
        params = stripe_client.checkout.sessions.create_async.call_args.kwargs["params"]
        assert session.url == "https://checkout.test/cs_1"
        assert params["mode"] == "subscription"
        assert params["line_items"] == [{"price": "price_monthly", "quantity": 1}]
        assert params["metadata"] == {"userId": "u1"}

    @pytest.mark.asyncio
    async def test_cancel_at_period_end(self):
        # Arrange
        stripe_client = MagicMock()
        stripe_client.subscriptions.update_async = AsyncMock(
            return_value=_subscription(cancel_at_period_end=True)
        )
        client = StripePaymentClient(stripe_client)

        # Act
        subscription = await client.set_cancel_at_period_end("sub_123", True)

        # Assert
        stripe_client.subscriptions.update_async.assert_awaited_once_with(
            "sub_123", params={"cancel_at_period_end": True}
        )
        assert subscription.cancel_at_period_end is True

    @pytest.mark.asyncio
    async def test_provider_error_translated(self):
        # Arrange
        stripe_client = MagicMock()
        stripe_client.subscriptions.retrieve_async = AsyncMock(
            side_effect=stripe.InvalidRequestError(
                "No such subscription: 'sub_x'", "id", http_status=404
            )
        )
        client = StripePaymentClient(stripe_client)

        # Act & Assert
        with pytest.raises(PaymentProviderError, match="No such subscription") as exc:
            await client.retrieve_subscription("sub_x")
        assert exc.value.status_code == 404
