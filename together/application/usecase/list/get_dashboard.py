"""Get dashboard use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import ListService, NotificationService, SubscriptionService
from together.domain.value import SubscriptionStatus, UserId

from .views import ListItem


class GetDashboardRequest(BaseModel):
    user_id: str


class DashboardSubscription(BaseModel):
    """Subscription summary shown in the dashboard header."""

    plan: str | None = None
    status: SubscriptionStatus
    is_pro: bool
    cancel_at_period_end: bool = False


class GetDashboardResponse(BaseModel):
    """Dashboard view."""

    lists: list[ListItem]
    unread_notifications: int
    subscription: DashboardSubscription | None = None


class GetDashboardUseCase(BaseUseCase):
    """Use case for the signed-in landing page.

    Notification and subscription panels are secondary: when they fail to
    load, the dashboard still renders the lists.
    """

    def __init__(
        self,
        list_service: ListService,
        notification_service: NotificationService,
        subscription_service: SubscriptionService,
    ) -> None:
        """Initialize dashboard use case.

        Args:
            list_service: List domain service
            notification_service: Notification domain service
            subscription_service: Subscription domain service
        """
        self.list_service = list_service
        self.notification_service = notification_service
        self.subscription_service = subscription_service

    async def execute(self, request: GetDashboardRequest) -> GetDashboardResponse:
        user_id = UserId(UUID(request.user_id))

        with logfire.span("get_dashboard.execute", user_id=request.user_id):
            user_lists = await self.list_service.get_user_lists(user_id)

            unread = 0
            try:
                notifications = await self.notification_service.load_enriched(user_id)
                unread = sum(1 for n in notifications if not n.notification.read)
            except Exception as e:
                logfire.warn("Dashboard notifications unavailable", error=str(e))

            summary = None
            try:
                subscription = await self.subscription_service.get_for_user(user_id)
                if subscription:
                    plan_name = subscription.plan.name if subscription.plan else None
                    summary = DashboardSubscription(
                        plan=plan_name,
                        status=subscription.status,
                        is_pro=self.subscription_service.is_pro(subscription),
                        cancel_at_period_end=subscription.cancel_at_period_end,
                    )
            except Exception as e:
                logfire.warn("Dashboard subscription unavailable", error=str(e))

            return GetDashboardResponse(
                lists=[ListItem.from_user_list(ul) for ul in user_lists],
                unread_notifications=unread,
                subscription=summary,
            )
