"""Get subscription use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.model import Subscription
from together.domain.service import SubscriptionService
from together.domain.value import SubscriptionStatus, UserId


class SubscriptionItem(BaseModel):
    """Subscription record with its plan."""

    status: SubscriptionStatus
    plan_id: int | None = None
    plan_name: str | None = None
    max_lists: int | None = None
    is_pro: bool
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False

    @classmethod
    def from_subscription(cls, subscription: Subscription, is_pro: bool) -> "SubscriptionItem":
        plan = subscription.plan
        return cls(
            status=subscription.status,
            plan_id=subscription.plan_id,
            plan_name=plan.name if plan else None,
            max_lists=plan.max_lists if plan else None,
            is_pro=is_pro,
            current_period_start=subscription.current_period_start,
            current_period_end=subscription.current_period_end,
            cancel_at_period_end=subscription.cancel_at_period_end,
        )


class GetSubscriptionRequest(BaseModel):
    user_id: str


class GetSubscriptionResponse(BaseModel):
    subscription: SubscriptionItem | None = None


class GetSubscriptionUseCase(BaseUseCase):
    def __init__(self, subscription_service: SubscriptionService) -> None:
        self.subscription_service = subscription_service

    async def execute(self, request: GetSubscriptionRequest) -> GetSubscriptionResponse:
        subscription = await self.subscription_service.get_for_user(
            UserId(UUID(request.user_id))
        )
        if subscription is None:
            return GetSubscriptionResponse()
        return GetSubscriptionResponse(
            subscription=SubscriptionItem.from_subscription(
                subscription, self.subscription_service.is_pro(subscription)
            )
        )
