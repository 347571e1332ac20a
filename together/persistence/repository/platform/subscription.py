"""Platform implementation of Subscription repository."""

from typing import Any, Optional

from pydantic_core import to_jsonable_python

from together.adapter.platform.gateway import eq
from together.domain.model import Plan, Subscription
from together.domain.repository import SubscriptionRepository
from together.domain.value import UserId
from together.persistence.mappers import (
    row_to_plan,
    row_to_subscription,
    subscription_to_dict,
)

from .base import PlatformRepository

_WITH_PLAN = "*,subscription_plans(*)"


class PlatformSubscriptionRepository(PlatformRepository, SubscriptionRepository):
    """Rows of ``user_subscriptions`` and ``subscription_plans``.

    Webhook handlers run without a user session, so this repository is
    normally bound to the service-role gateway.
    """

    async def find_latest_for_user(self, user_id: UserId) -> Optional[Subscription]:
        result = await self.gateway.select(
            "user_subscriptions",
            _WITH_PLAN,
            [eq("user_id", user_id)],
            order="created_at.desc",
            limit=1,
        )
        rows = self._rows("subscriptions.find_latest_for_user", result)
        return row_to_subscription(rows[0]) if rows else None

    async def find_by_customer(self, customer_id: str) -> Optional[Subscription]:
        result = await self.gateway.select(
            "user_subscriptions",
            _WITH_PLAN,
            [eq("stripe_customer_id", customer_id)],
            limit=1,
        )
        rows = self._rows("subscriptions.find_by_customer", result)
        return row_to_subscription(rows[0]) if rows else None

    async def upsert(self, subscription: Subscription) -> Subscription:
        result = await self.gateway.upsert(
            "user_subscriptions",
            subscription_to_dict(subscription),
            on_conflict="user_id",
        )
        rows = self._rows("subscriptions.upsert", result)
        return row_to_subscription(rows[0]) if rows else subscription

    async def update_by_customer(self, customer_id: str, values: dict[str, Any]) -> int:
        result = await self.gateway.update(
            "user_subscriptions",
            to_jsonable_python(values),
            [eq("stripe_customer_id", customer_id)],
        )
        return len(self._rows("subscriptions.update_by_customer", result))

    async def find_plan_by_name(self, name: str) -> Optional[Plan]:
        result = await self.gateway.select(
            "subscription_plans", filters=[eq("name", name)], limit=1
        )
        rows = self._rows("plans.find_by_name", result)
        return row_to_plan(rows[0]) if rows else None
