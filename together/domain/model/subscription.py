"""Subscription entities."""

from datetime import datetime
from typing import Any, Optional

from together.domain.model.common import DomainModel
from together.domain.value import SubscriptionStatus, UserId


class Plan(DomainModel):
    """Row of the subscription_plans table."""

    id: int
    name: str
    description: Optional[str] = None
    features: Optional[Any] = None
    max_lists: Optional[int] = None


class Subscription(DomainModel):
    """A user's subscription record, kept in sync by payment webhooks."""

    user_id: UserId
    plan_id: Optional[int] = None
    status: SubscriptionStatus = SubscriptionStatus.INCOMPLETE
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    created_at: Optional[datetime] = None
    plan: Optional[Plan] = None


class ProviderSubscription(DomainModel):
    """Subscription as reported by the payment provider."""

    id: str
    customer: str
    status: SubscriptionStatus
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False


class CheckoutSession(DomainModel):
    """Hosted checkout session created with the payment provider."""

    id: str
    url: Optional[str] = None
