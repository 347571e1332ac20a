"""Subscription repository interface."""

from abc import ABC, abstractmethod
from typing import Any

from together.domain.model.subscription import Plan, Subscription
from together.domain.value import UserId


class SubscriptionRepository(ABC):
    """Repository for user subscriptions and plans."""

    @abstractmethod
    async def find_latest_for_user(self, user_id: UserId) -> Subscription | None:
        """Most recent subscription record of a user, with its plan."""
        pass

    @abstractmethod
    async def find_by_customer(self, customer_id: str) -> Subscription | None:
        """Find the record linked to a payment provider customer."""
        pass

    @abstractmethod
    async def upsert(self, subscription: Subscription) -> Subscription:
        """Create or replace the record of ``subscription.user_id``."""
        pass

    @abstractmethod
    async def update_by_customer(self, customer_id: str, values: dict[str, Any]) -> int:
        """Apply a partial update to the records of a customer.

        Returns:
            Number of rows updated
        """
        pass

    @abstractmethod
    async def find_plan_by_name(self, name: str) -> Plan | None:
        pass
