"""Cancel or reactivate subscription use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import SubscriptionService
from together.domain.value import UserId

from .get_subscription import SubscriptionItem


class UpdateSubscriptionRequest(BaseModel):
    """``cancel_at_period_end=True`` cancels, False reactivates."""

    user_id: str
    cancel_at_period_end: bool


class UpdateSubscriptionUseCase(BaseUseCase):
    """Use case for scheduling or undoing cancellation at period end.

    The plan itself only changes when the provider's webhook arrives.
    """

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self.subscription_service = subscription_service

    async def execute(self, request: UpdateSubscriptionRequest) -> SubscriptionItem:
        subscription = await self.subscription_service.set_cancel_at_period_end(
            UserId(UUID(request.user_id)), request.cancel_at_period_end
        )
        return SubscriptionItem.from_subscription(
            subscription, self.subscription_service.is_pro(subscription)
        )
