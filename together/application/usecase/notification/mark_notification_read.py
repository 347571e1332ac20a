"""Mark notification read use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import NotificationService
from together.domain.value import NotificationId, UserId


class MarkNotificationReadRequest(BaseModel):
    notification_id: str
    user_id: str


class MarkNotificationReadUseCase(BaseUseCase):
    """Use case for dismissing one notification.

    Raises NotFoundError when the notification is not the caller's.
    """

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: MarkNotificationReadRequest) -> None:
        await self.notification_service.mark_read(
            NotificationId(UUID(request.notification_id)),
            UserId(UUID(request.user_id)),
        )
