"""Unit tests for HandleWebhookUseCase."""

import json

import pytest

from together.adapter.error import WebhookSignatureError
from together.application.usecase.subscription import HandleWebhookUseCase
from together.application.usecase.subscription.handle_webhook import (
    HandleWebhookRequest,
)
from together.config import Settings
from together.domain.model import Subscription
from together.domain.value import SubscriptionStatus
from together.persistence.repository.inmemory import InMemoryStore
from tests.harness import create_env_fixture, make_user, sign_webhook

# Unit test fixture
unit_env = create_env_fixture()


def _deleted_event(customer_id: str) -> bytes:
    return json.dumps(
        {
            "id": "evt_1",
            "type": "customer.subscription.deleted",
            "data": {"object": {"customer": customer_id}},
        }
    ).encode()


class TestHandleWebhookUseCase:
    """Tests for HandleWebhookUseCase."""

    async def _seed(self, env):
        store = await env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        store.subscriptions.append(
            Subscription(
                user_id=alice.id,
                plan_id=2,
                status=SubscriptionStatus.ACTIVE,
                stripe_customer_id="cus_123",
            )
        )
        return store

    @pytest.mark.asyncio
    async def test_signed_event_applied(self, unit_env):
        # Arrange
        store = await self._seed(unit_env)
        settings = await unit_env.get(Settings)
        payload = _deleted_event("cus_123")
        use_case = await unit_env.get(HandleWebhookUseCase)

        # Act
        response = await use_case.execute(
            HandleWebhookRequest(
                payload=payload,
                signature=sign_webhook(payload, settings.payment.webhook_secret),
            )
        )

        # Assert
        assert response.handled is True
        assert response.event_type == "customer.subscription.deleted"
        assert store.subscriptions[0].status == SubscriptionStatus.CANCELED

    @pytest.mark.asyncio
    async def test_bad_signature_writes_nothing(self, unit_env):
        """A payload signed with another secret is rejected untouched."""
        # Arrange
        store = await self._seed(unit_env)
        payload = _deleted_event("cus_123")
        use_case = await unit_env.get(HandleWebhookUseCase)

        # Act & Assert
        with pytest.raises(WebhookSignatureError):
            await use_case.execute(
                HandleWebhookRequest(
                    payload=payload, signature=sign_webhook(payload, "whsec_other")
                )
            )
        assert store.subscriptions[0].status == SubscriptionStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_missing_signature(self, unit_env):
        # Arrange
        store = await self._seed(unit_env)
        use_case = await unit_env.get(HandleWebhookUseCase)

        # Act & Assert
        with pytest.raises(WebhookSignatureError):
            await use_case.execute(HandleWebhookRequest(payload=_deleted_event("cus_123")))
        assert store.subscriptions[0].status == SubscriptionStatus.ACTIVE
