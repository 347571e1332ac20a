"""In-memory subscription repository for testing."""

from datetime import datetime, timezone
from typing import Any, Optional

from together.domain.model.subscription import Plan, Subscription
from together.domain.repository.subscription import SubscriptionRepository
from together.domain.value import UserId

from .store import InMemoryStore


class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory implementation of SubscriptionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _with_plan(self, subscription: Subscription) -> Subscription:
        plan = self.store.plans.get(subscription.plan_id) if subscription.plan_id else None
        return subscription.model_copy(update={"plan": plan})

    async def find_latest_for_user(self, user_id: UserId) -> Optional[Subscription]:
        for subscription in reversed(self.store.subscriptions):
            if subscription.user_id == user_id:
                return self._with_plan(subscription)
        return None

    async def find_by_customer(self, customer_id: str) -> Optional[Subscription]:
        for subscription in self.store.subscriptions:
            if subscription.stripe_customer_id == customer_id:
                return self._with_plan(subscription)
        return None

    async def upsert(self, subscription: Subscription) -> Subscription:
        """Replace the user's record, or append a new one."""
        stored = subscription.model_copy(
            update={
                "plan": None,
                "created_at": subscription.created_at or datetime.now(timezone.utc),
            }
        )
        for i, existing in enumerate(self.store.subscriptions):
            if existing.user_id == subscription.user_id:
                self.store.subscriptions[i] = stored.model_copy(
                    update={"created_at": existing.created_at}
                )
                return self._with_plan(self.store.subscriptions[i])

        self.store.subscriptions.append(stored)
        return self._with_plan(stored)

    async def update_by_customer(self, customer_id: str, values: dict[str, Any]) -> int:
        count = 0
        for i, subscription in enumerate(self.store.subscriptions):
            if subscription.stripe_customer_id == customer_id:
                self.store.subscriptions[i] = subscription.model_copy(update=values)
                count += 1
        return count

    async def find_plan_by_name(self, name: str) -> Optional[Plan]:
        for plan in self.store.plans.values():
            if plan.name == name:
                return plan
        return None
