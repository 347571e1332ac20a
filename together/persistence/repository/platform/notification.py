"""Platform implementation of Notification repository."""

from typing import Optional

from together.adapter.platform.gateway import eq, in_
from together.domain.error import RepositoryError
from together.domain.model import Notification
from together.domain.repository import NotificationRepository
from together.domain.value import (
    InvitationId,
    NotificationId,
    NotificationType,
    UserId,
)
from together.persistence.mappers import notification_to_dict, row_to_notification

from .base import PlatformRepository


class PlatformNotificationRepository(PlatformRepository, NotificationRepository):
    """Rows of the ``notifications`` table."""

    async def create(self, notification: Notification) -> Notification:
        result = await self.gateway.insert(
            "notifications", notification_to_dict(notification)
        )
        rows = self._rows("notifications.create", result)
        if not rows:
            raise RepositoryError("notifications.create", "no row returned")
        return row_to_notification(rows[0])

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        result = await self.gateway.select(
            "notifications", filters=[eq("id", notification_id)]
        )
        rows = self._rows("notifications.find_by_id", result)
        return row_to_notification(rows[0]) if rows else None

    async def find_for_user(self, user_id: UserId) -> list[Notification]:
        result = await self.gateway.select(
            "notifications",
            filters=[eq("user_id", user_id)],
            order="created_at.desc",
        )
        return [
            row_to_notification(row)
            for row in self._rows("notifications.find_for_user", result)
        ]

    async def find_for_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> list[Notification]:
        result = await self.gateway.select(
            "notifications",
            filters=[
                eq("user_id", user_id),
                eq("type", NotificationType.LIST_INVITATION),
                eq("data->>invitation_id", invitation_id),
            ],
        )
        return [
            row_to_notification(row)
            for row in self._rows("notifications.find_for_invitation", result)
        ]

    async def mark_read(self, notification_ids: list[NotificationId]) -> int:
        if not notification_ids:
            return 0
        result = await self.gateway.update(
            "notifications", {"read": True}, [in_("id", notification_ids)]
        )
        return len(self._rows("notifications.mark_read", result))
