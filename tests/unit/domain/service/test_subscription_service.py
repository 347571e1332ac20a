"""Unit tests for SubscriptionService."""

from datetime import datetime, timezone

import pytest

from together.domain.error import NotFoundError, ValidationError, WebhookEventError
from together.domain.model import ProviderSubscription, Subscription
from together.domain.service import PaymentClient, SubscriptionService
from together.domain.value import SubscriptionStatus
from together.persistence.repository.inmemory import InMemoryStore
from tests.harness import create_env_fixture, make_user

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

PERIOD_START = datetime(2026, 1, 1, tzinfo=timezone.utc)
PERIOD_END = datetime(2026, 2, 1, tzinfo=timezone.utc)


def _seed_provider_subscription(payment_client, subscription_id="sub_123"):
    payment_client.subscriptions[subscription_id] = ProviderSubscription(
        id=subscription_id,
        customer="cus_123",
        status=SubscriptionStatus.ACTIVE,
        current_period_start=PERIOD_START,
        current_period_end=PERIOD_END,
    )


class TestHandleEvent:
    """Tests for webhook event handling."""

    @pytest.mark.asyncio
    async def test_checkout_completed_activates_pro(self, unit_env):
        """A completed checkout stores an active Pro subscription."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        payment_client = await unit_env.get(PaymentClient)
        _seed_provider_subscription(payment_client)
        service = await unit_env.get(SubscriptionService)

        # Act
        handled = await service.handle_event(
            "checkout.session.completed",
            {
                "customer": "cus_123",
                "subscription": "sub_123",
                "metadata": {"userId": str(alice.id)},
            },
        )

        # Assert
        assert handled is True
        subscription = await service.get_for_user(alice.id)
        assert subscription is not None
        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.plan is not None
        assert subscription.plan.name == "Pro"
        assert subscription.current_period_end == PERIOD_END
        assert service.is_pro(subscription)

    @pytest.mark.asyncio
    async def test_subscription_updated(self, unit_env):
        """Status and period are copied from the event."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        store.subscriptions.append(
            Subscription(
                user_id=alice.id,
                plan_id=2,
                status=SubscriptionStatus.ACTIVE,
                stripe_customer_id="cus_123",
                stripe_subscription_id="sub_123",
            )
        )
        service = await unit_env.get(SubscriptionService)

        # Act
        await service.handle_event(
            "customer.subscription.updated",
            {
                "customer": "cus_123",
                "status": "past_due",
                "current_period_start": int(PERIOD_START.timestamp()),
                "current_period_end": int(PERIOD_END.timestamp()),
                "cancel_at_period_end": True,
            },
        )

        # Assert
        subscription = await service.get_for_user(alice.id)
        assert subscription.status == SubscriptionStatus.PAST_DUE
        assert subscription.current_period_end == PERIOD_END
        assert subscription.cancel_at_period_end is True
        assert not service.is_pro(subscription)

    @pytest.mark.asyncio
    async def test_subscription_deleted_reverts_to_free(self, unit_env):
        """A deleted subscription is canceled and moved to the Free plan."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        store.subscriptions.append(
            Subscription(
                user_id=alice.id,
                plan_id=2,
                status=SubscriptionStatus.ACTIVE,
                stripe_customer_id="cus_123",
            )
        )
        service = await unit_env.get(SubscriptionService)

        # Act
        await service.handle_event(
            "customer.subscription.deleted", {"customer": "cus_123"}
        )

        # Assert
        subscription = await service.get_for_user(alice.id)
        assert subscription.status == SubscriptionStatus.CANCELED
        assert subscription.plan.name == "Free"

    @pytest.mark.asyncio
    async def test_unknown_customer_changes_nothing(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(SubscriptionService)

        # Act
        handled = await service.handle_event(
            "customer.subscription.deleted", {"customer": "cus_unknown"}
        )

        # Assert
        assert handled is True
        assert store.subscriptions == []

    @pytest.mark.asyncio
    async def test_unhandled_event_type(self, unit_env):
        # Arrange
        service = await unit_env.get(SubscriptionService)

        # Act
        handled = await service.handle_event("invoice.paid", {})

        # Assert
        assert handled is False

    @pytest.mark.asyncio
    async def test_malformed_payload(self, unit_env):
        """A handled event missing required fields is rejected."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(SubscriptionService)

        # Act & Assert
        with pytest.raises(WebhookEventError):
            await service.handle_event("checkout.session.completed", {"customer": "c"})
        assert store.subscriptions == []


class TestCheckout:
    """Tests for checkout and cancellation."""

    @pytest.mark.asyncio
    async def test_first_checkout_creates_customer(self, unit_env):
        """The customer is created once and linked to the user."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        payment_client = await unit_env.get(PaymentClient)
        service = await unit_env.get(SubscriptionService)

        # Act
        first = await service.create_checkout(
            alice, "price_monthly_test", "http://ok", "http://cancel"
        )
        await service.create_checkout(
            alice, "price_monthly_test", "http://ok", "http://cancel"
        )

        # Assert
        assert first.url is not None
        assert len(payment_client.customers) == 1
        assert len(store.subscriptions) == 1
        assert store.subscriptions[0].status == SubscriptionStatus.INCOMPLETE

    @pytest.mark.asyncio
    async def test_missing_price_rejected(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        service = await unit_env.get(SubscriptionService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_checkout(alice, None, "http://ok", "http://cancel")

    @pytest.mark.asyncio
    async def test_cancel_at_period_end(self, unit_env):
        """Cancellation is scheduled with the provider and mirrored locally."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        payment_client = await unit_env.get(PaymentClient)
        _seed_provider_subscription(payment_client)
        store.subscriptions.append(
            Subscription(
                user_id=alice.id,
                plan_id=2,
                status=SubscriptionStatus.ACTIVE,
                stripe_customer_id="cus_123",
                stripe_subscription_id="sub_123",
            )
        )
        service = await unit_env.get(SubscriptionService)

        # Act
        result = await service.set_cancel_at_period_end(alice.id, True)

        # Assert
        assert result.cancel_at_period_end is True
        assert store.subscriptions[0].cancel_at_period_end is True
        assert payment_client.subscriptions["sub_123"].cancel_at_period_end is True

    @pytest.mark.asyncio
    async def test_cancel_without_subscription(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        service = await unit_env.get(SubscriptionService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.set_cancel_at_period_end(alice.id, True)
