"""Get notifications use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.model import EnrichedNotification
from together.domain.service import NotificationService
from together.domain.value import InvitationStatus, NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification with its references resolved.

    Fields that could not be resolved are None; clients render fallback
    text for them.
    """

    id: str
    type: NotificationType
    read: bool
    created_at: datetime
    data: dict[str, Any]
    invitation_id: str | None = None
    invitation_status: InvitationStatus | None = None
    list_id: str | None = None
    list_title: str | None = None
    inviter_email: str | None = None
    inviter_name: str | None = None

    @classmethod
    def from_enriched(cls, enriched: EnrichedNotification) -> "NotificationItem":
        n = enriched.notification
        return cls(
            id=str(n.id),
            type=n.type,
            read=n.read,
            created_at=n.created_at,
            data=n.data,
            invitation_id=str(n.invitation_id) if n.invitation_id else None,
            invitation_status=enriched.invitation_status,
            list_id=str(n.list_id) if n.list_id else None,
            list_title=enriched.list_title,
            inviter_email=enriched.inviter_email,
            inviter_name=enriched.inviter_name,
        )


class GetNotificationsRequest(BaseModel):
    user_id: str


class GetNotificationsResponse(BaseModel):
    """Notifications newest first, with the unread count."""

    notifications: list[NotificationItem]
    unread_count: int


class GetNotificationsUseCase(BaseUseCase):
    """Use case for the notification panel."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetNotificationsRequest) -> GetNotificationsResponse:
        enriched = await self.notification_service.load_enriched(
            UserId(UUID(request.user_id))
        )
        items = [NotificationItem.from_enriched(e) for e in enriched]
        return GetNotificationsResponse(
            notifications=items,
            unread_count=sum(1 for item in items if not item.read),
        )
