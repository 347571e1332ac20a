"""Notification repository interface."""

from abc import ABC, abstractmethod

from together.domain.model.notification import Notification
from together.domain.value import InvitationId, NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        """Insert a notification row."""
        pass

    @abstractmethod
    async def find_by_id(self, notification_id: NotificationId) -> Notification | None:
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId) -> list[Notification]:
        """Notifications addressed to a user, newest first."""
        pass

    @abstractmethod
    async def find_for_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> list[Notification]:
        """Invitation notifications of a user whose payload references an invitation.

        Args:
            user_id: Recipient
            invitation_id: Value of ``data.invitation_id`` to match

        Returns:
            Matching notifications
        """
        pass

    @abstractmethod
    async def mark_read(self, notification_ids: list[NotificationId]) -> int:
        """Flag notifications as read.

        Returns:
            Number of rows updated
        """
        pass
