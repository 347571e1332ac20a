"""In-memory notification repository for testing."""

from typing import Optional

from together.domain.model.notification import Notification
from together.domain.repository.notification import NotificationRepository
from together.domain.value import (
    InvitationId,
    NotificationId,
    NotificationType,
    UserId,
)

from .store import InMemoryStore


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create(self, notification: Notification) -> Notification:
        self.store.notifications[notification.id] = notification
        return notification

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        return self.store.notifications.get(notification_id)

    async def find_for_user(self, user_id: UserId) -> list[Notification]:
        matches = [n for n in self.store.notifications.values() if n.user_id == user_id]
        matches.sort(key=lambda n: n.created_at, reverse=True)
        return matches

    async def find_for_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> list[Notification]:
        return [
            n
            for n in self.store.notifications.values()
            if n.user_id == user_id
            and n.type == NotificationType.LIST_INVITATION
            and n.data.get("invitation_id") == str(invitation_id)
        ]

    async def mark_read(self, notification_ids: list[NotificationId]) -> int:
        count = 0
        for nid in notification_ids:
            notification = self.store.notifications.get(nid)
            if notification is None:
                continue
            self.store.notifications[nid] = notification.model_copy(update={"read": True})
            count += 1
        return count
