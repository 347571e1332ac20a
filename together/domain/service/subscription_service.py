"""Subscription domain service."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import logfire

from together.domain.error import NotFoundError, ValidationError, WebhookEventError
from together.domain.model.subscription import (
    CheckoutSession,
    ProviderSubscription,
    Subscription,
)
from together.domain.model.user import User
from together.domain.repository import SubscriptionRepository
from together.domain.value import SubscriptionStatus, UserId

from .base import Service


class PaymentClient:
    """Payment provider API."""

    async def retrieve_subscription(self, subscription_id: str) -> ProviderSubscription:
        raise NotImplementedError

    async def create_customer(self, email: str, user_id: str) -> str:
        """Create a customer and return its provider ID."""
        raise NotImplementedError

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        user_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        raise NotImplementedError

    async def set_cancel_at_period_end(
        self, subscription_id: str, cancel: bool
    ) -> ProviderSubscription:
        raise NotImplementedError


class SubscriptionService(Service):
    """Keeps subscription records in sync with the payment provider.

    Webhook events are the only writer of plan and status changes; checkout
    only creates the customer link.
    """

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        payment_client: PaymentClient,
        pro_plan_name: str = "Pro",
        free_plan_name: str = "Free",
    ) -> None:
        """Initialize subscription service.

        Args:
            subscription_repository: Subscription repository
            payment_client: Payment provider client
            pro_plan_name: Plan granted by a completed checkout
            free_plan_name: Plan restored when a subscription ends
        """
        self.subscription_repository = subscription_repository
        self.payment_client = payment_client
        self.pro_plan_name = pro_plan_name
        self.free_plan_name = free_plan_name

    async def get_for_user(self, user_id: UserId) -> Subscription | None:
        return await self.subscription_repository.find_latest_for_user(user_id)

    def is_pro(self, subscription: Subscription | None) -> bool:
        """Pro features are on while a Pro subscription is active or trialing."""
        if subscription is None or subscription.plan is None:
            return False
        return subscription.plan.name == self.pro_plan_name and subscription.status in (
            SubscriptionStatus.ACTIVE,
            SubscriptionStatus.TRIALING,
        )

    async def handle_event(self, event_type: str, obj: dict[str, Any]) -> bool:
        """Apply a verified webhook event.

        Args:
            event_type: Provider event type
            obj: The event's ``data.object``

        Returns:
            False when the event type is not handled

        Raises:
            WebhookEventError: If a handled event lacks required fields
        """
        handlers = {
            "checkout.session.completed": self._on_checkout_completed,
            "customer.subscription.updated": self._on_subscription_updated,
            "customer.subscription.deleted": self._on_subscription_deleted,
        }
        handler = handlers.get(event_type)
        if handler is None:
            logfire.info("Ignoring webhook event", event_type=event_type)
            return False

        with logfire.span("subscription_service.handle_event", event_type=event_type):
            try:
                await handler(obj)
            except (KeyError, TypeError, ValueError) as e:
                raise WebhookEventError(f"Malformed {event_type} payload: {e}")
            return True

    async def _on_checkout_completed(self, obj: dict[str, Any]) -> None:
        user_id = UserId(UUID(str(obj["metadata"]["userId"])))
        customer_id = obj["customer"]
        subscription_id = obj.get("subscription")
        if not subscription_id:
            logfire.info("Checkout without subscription", customer_id=customer_id)
            return

        provider_sub = await self.payment_client.retrieve_subscription(subscription_id)
        plan = await self.subscription_repository.find_plan_by_name(self.pro_plan_name)

        await self.subscription_repository.upsert(
            Subscription(
                user_id=user_id,
                plan_id=plan.id if plan else None,
                status=provider_sub.status,
                stripe_customer_id=customer_id,
                stripe_subscription_id=subscription_id,
                current_period_start=provider_sub.current_period_start,
                current_period_end=provider_sub.current_period_end,
                cancel_at_period_end=provider_sub.cancel_at_period_end,
            )
        )
        logfire.info(
            "Subscription activated",
            user_id=str(user_id),
            status=provider_sub.status.value,
        )

    async def _on_subscription_updated(self, obj: dict[str, Any]) -> None:
        customer_id = obj["customer"]
        if not await self.subscription_repository.find_by_customer(customer_id):
            logfire.warn("Unknown customer in webhook", customer_id=customer_id)
            return

        await self.subscription_repository.update_by_customer(
            customer_id,
            {
                "status": SubscriptionStatus(obj["status"]),
                "current_period_start": _from_epoch(obj.get("current_period_start")),
                "current_period_end": _from_epoch(obj.get("current_period_end")),
                "cancel_at_period_end": bool(obj.get("cancel_at_period_end", False)),
            },
        )
        logfire.info("Subscription updated", customer_id=customer_id)

    async def _on_subscription_deleted(self, obj: dict[str, Any]) -> None:
        customer_id = obj["customer"]
        if not await self.subscription_repository.find_by_customer(customer_id):
            logfire.warn("Unknown customer in webhook", customer_id=customer_id)
            return

        free_plan = await self.subscription_repository.find_plan_by_name(
            self.free_plan_name
        )
        await self.subscription_repository.update_by_customer(
            customer_id,
            {
                "status": SubscriptionStatus.CANCELED,
                "plan_id": free_plan.id if free_plan else None,
            },
        )
        logfire.info("Subscription canceled", customer_id=customer_id)

    async def create_checkout(
        self,
        user: User,
        price_id: str | None,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Start a hosted checkout, creating the customer on first use.

        Raises:
            ValidationError: If the billing option has no configured price
        """
        if not price_id:
            raise ValidationError("This billing option is not available")

        with logfire.span("subscription_service.create_checkout", user_id=str(user.id)):
            existing = await self.subscription_repository.find_latest_for_user(user.id)
            customer_id = existing.stripe_customer_id if existing else None

            if not customer_id:
                customer_id = await self.payment_client.create_customer(
                    user.email.root, str(user.id)
                )
                await self.subscription_repository.upsert(
                    Subscription(
                        user_id=user.id,
                        stripe_customer_id=customer_id,
                        status=SubscriptionStatus.INCOMPLETE,
                    )
                )
                logfire.info(
                    "Payment customer created",
                    user_id=str(user.id),
                    customer_id=customer_id,
                )

            return await self.payment_client.create_checkout_session(
                customer_id=customer_id,
                price_id=price_id,
                user_id=str(user.id),
                success_url=success_url,
                cancel_url=cancel_url,
            )

    async def set_cancel_at_period_end(
        self, user_id: UserId, cancel: bool
    ) -> Subscription:
        """Schedule cancellation at period end, or undo it."""
        with logfire.span(
            "subscription_service.set_cancel_at_period_end",
            user_id=str(user_id),
            cancel=cancel,
        ):
            current = await self.subscription_repository.find_latest_for_user(user_id)
            if not current or not current.stripe_subscription_id:
                raise NotFoundError("Subscription", str(user_id))

            provider_sub = await self.payment_client.set_cancel_at_period_end(
                current.stripe_subscription_id, cancel
            )
            if current.stripe_customer_id:
                await self.subscription_repository.update_by_customer(
                    current.stripe_customer_id,
                    {"cancel_at_period_end": provider_sub.cancel_at_period_end},
                )
            return current.model_copy(
                update={"cancel_at_period_end": provider_sub.cancel_at_period_end}
            )


def _from_epoch(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
