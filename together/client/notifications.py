"""Notification panel state."""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from together.client.api import ApiClient, Result
from together.client.events import EventSource, EventSubscription, ServerEvent
from together.client.reconcile import InvitationStatusLedger
from together.domain.value import ChangeType, InvitationStatus, NotificationType

logger = logging.getLogger(__name__)


class NotificationView(BaseModel):
    """Notification as rendered by the panel."""

    id: str
    type: NotificationType
    read: bool
    created_at: datetime
    data: dict[str, Any] = {}
    invitation_id: str | None = None
    invitation_status: InvitationStatus | None = None
    list_id: str | None = None
    list_title: str | None = None
    inviter_email: str | None = None
    inviter_name: str | None = None


def describe(notification: NotificationView) -> str:
    """Text for a notification, with fallbacks for unresolved references."""
    inviter = notification.inviter_name or notification.inviter_email or "Someone"
    title = f'"{notification.list_title}"' if notification.list_title else "a list"

    if notification.type != NotificationType.LIST_INVITATION:
        return "You have a new notification"
    if notification.invitation_status == InvitationStatus.ACCEPTED:
        return f"You joined {title}"
    if notification.invitation_status == InvitationStatus.REJECTED:
        return f"You declined the invitation to {title}"
    return f"{inviter} invited you to {title}"


def is_actionable(notification: NotificationView) -> bool:
    """Whether accept/decline should be offered.

    Only pending invitations qualify; a handled invitation never does,
    whatever the notification's read flag says.
    """
    return (
        notification.type == NotificationType.LIST_INVITATION
        and notification.invitation_id is not None
        and notification.invitation_status == InvitationStatus.PENDING
    )


class NotificationCenter:
    """Notifications of the signed-in user, kept live.

    Every pushed insert triggers a full reload so the enriched view always
    comes from one consistent read. Accepting or declining patches the item
    in place instead of reloading.
    """

    def __init__(self, api: ApiClient, events: EventSource) -> None:
        self.api = api
        self.events = events
        self.ledger = InvitationStatusLedger()
        self.notifications: list[NotificationView] = []
        self.unread_count = 0
        self.error: str | None = None
        # Notification whose accept/decline surface is open, if any
        self.open_surface: str | None = None
        self._in_flight: set[str] = set()
        self._subscription: EventSubscription | None = None
        self._stopped = False

    def open(self, notification_id: str) -> None:
        self.open_surface = notification_id

    def close_surface(self) -> None:
        self.open_surface = None

    async def load(self) -> Result:
        """Reload everything and recompute the unread counter."""
        result = await self.api.get_notifications()
        if self._stopped:
            return result
        if not result.ok:
            self.error = result.error
            return result

        self.error = None
        items = [
            NotificationView.model_validate(item)
            for item in result.field("notifications") or []
        ]
        for item in items:
            item.invitation_status = self.ledger.resolve(
                item.invitation_id, item.invitation_status
            )
        self.notifications = items
        self.unread_count = sum(1 for n in items if not n.read)
        return result

    async def start(self) -> Result:
        """Subscribe to new notifications and do the initial load."""
        self._stopped = False
        if self._subscription is not None:
            return await self.load()
        self._subscription = self.events.subscribe(
            "/api/events/notifications", self._on_event
        )
        return await self.load()

    async def stop(self) -> None:
        """Unsubscribe. Responses still in flight are dropped."""
        self._stopped = True
        if self._subscription is not None:
            subscription, self._subscription = self._subscription, None
            await subscription.close()

    async def _on_event(self, event: ServerEvent) -> None:
        if self._stopped:
            return
        if event.event == ChangeType.INSERT.value:
            await self.load()

    def find(self, notification_id: str) -> NotificationView | None:
        return next((n for n in self.notifications if n.id == notification_id), None)

    def _settle(self, notification_id: str, status: InvitationStatus) -> None:
        """Apply a confirmed accept/decline to one item."""
        item = self.find(notification_id)
        if item is None:
            return
        if item.invitation_id:
            self.ledger.record(item.invitation_id, status)
        item.invitation_status = status
        if not item.read:
            item.read = True
            self.unread_count = max(0, self.unread_count - 1)

    async def handle_accept(self, notification: NotificationView) -> Result | None:
        """Accept the invitation behind a notification.

        Success is only taken from an explicit ``success: true`` in the
        response. Returns None when the same action is already in flight.
        """
        key = f"accept:{notification.id}"
        if key in self._in_flight or not notification.invitation_id:
            return None

        self._in_flight.add(key)
        self.close_surface()
        try:
            result = await self.api.accept_invitation(
                invitation_id=notification.invitation_id
            )
        finally:
            self._in_flight.discard(key)

        if result.field("success") is True:
            self._settle(notification.id, InvitationStatus.ACCEPTED)
        else:
            self.error = result.field("message") or result.error or "Could not accept"
            logger.warning(
                f"Accept failed for {notification.invitation_id}: "
                f"{result.field('error')} step={result.field('failed_step')}"
            )
        return result

    async def handle_reject(self, notification: NotificationView) -> Result | None:
        """Decline the invitation, then mark the notification read."""
        key = f"reject:{notification.id}"
        if key in self._in_flight or not notification.invitation_id:
            return None

        self._in_flight.add(key)
        self.close_surface()
        try:
            result = await self.api.reject_invitation(notification.invitation_id)
            if result.field("success") is True:
                read = await self.api.mark_notification_read(notification.id)
                if not read.ok:
                    logger.warning(f"Could not mark {notification.id} read: {read.error}")
        finally:
            self._in_flight.discard(key)

        if result.field("success") is True:
            self._settle(notification.id, InvitationStatus.REJECTED)
        else:
            self.error = result.field("message") or result.error or "Could not decline"
        return result
