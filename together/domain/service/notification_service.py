"""Notification domain service."""

from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import TypeVar
from uuid import uuid4

import logfire

from together.domain.error import NotFoundError, RepositoryError
from together.domain.model.invitation import Invitation
from together.domain.model.notification import EnrichedNotification, Notification
from together.domain.model.realtime import ChangeEvent, notification_topic
from together.domain.repository import (
    InvitationRepository,
    NotificationRepository,
    TaskListRepository,
    UserRepository,
)
from together.domain.value import (
    ChangeType,
    InvitationId,
    NotificationId,
    NotificationType,
    UserId,
)

from .base import Service
from .realtime_service import ChangeFeed

T = TypeVar("T")


class NotificationService(Service):
    """Domain service for notifications.

    Notification payloads only hold weak references. Reading them back
    resolves those references in three batched lookups (invitations, lists,
    inviters) and merges the results by key; anything that cannot be
    resolved is left empty.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        invitation_repository: InvitationRepository,
        task_list_repository: TaskListRepository,
        user_repository: UserRepository,
        change_feed: ChangeFeed,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            invitation_repository: Invitation repository, for enrichment
            task_list_repository: List repository, for enrichment
            user_repository: User repository, for inviter lookups
            change_feed: Feed receiving notification inserts
        """
        self.notification_repository = notification_repository
        self.invitation_repository = invitation_repository
        self.task_list_repository = task_list_repository
        self.user_repository = user_repository
        self.change_feed = change_feed

    async def notify_invitation(self, invitation: Invitation) -> Notification | None:
        """Notify the invitee if the email belongs to a registered user.

        Args:
            invitation: Freshly created invitation

        Returns:
            The notification, or None when the invitee has no account yet
        """
        with logfire.span(
            "notification_service.notify_invitation",
            invitation_id=str(invitation.id),
        ):
            invitee = await self.user_repository.find_by_email(invitation.email)
            if not invitee:
                logfire.info(
                    "Invitee not registered, no notification",
                    invitation_id=str(invitation.id),
                )
                return None

            notification = Notification(
                id=NotificationId(uuid4()),
                user_id=invitee.id,
                type=NotificationType.LIST_INVITATION,
                data={
                    "invitation_id": str(invitation.id),
                    "list_id": str(invitation.list_id),
                    "invited_by": str(invitation.invited_by),
                },
                read=False,
                created_at=datetime.now(timezone.utc),
            )
            saved = await self.notification_repository.create(notification)
            logfire.info(
                "Invitation notification created",
                notification_id=str(saved.id),
                user_id=str(invitee.id),
            )

            await self.change_feed.publish(
                ChangeEvent(
                    topic=notification_topic(invitee.id),
                    type=ChangeType.INSERT,
                    table="notifications",
                    record=saved.model_dump(mode="json"),
                )
            )
            return saved

    async def _batch(
        self, label: str, ids: set, lookup: Callable[[list], Awaitable[list[T]]]
    ) -> list[T]:
        if not ids:
            return []
        try:
            return await lookup(list(ids))
        except RepositoryError as e:
            logfire.warn("Enrichment lookup failed", lookup=label, error=str(e))
            return []

    async def load_enriched(self, user_id: UserId) -> list[EnrichedNotification]:
        """Notifications of a user with their references resolved, newest first.

        Args:
            user_id: Recipient

        Returns:
            Enriched notifications; unresolved fields are None
        """
        with logfire.span("notification_service.load_enriched", user_id=str(user_id)):
            notifications = await self.notification_repository.find_for_user(user_id)

            invitation_ids = {n.invitation_id for n in notifications} - {None}
            list_ids = {n.list_id for n in notifications} - {None}
            inviter_ids = {n.invited_by for n in notifications} - {None}

            invitations = await self._batch(
                "invitations", invitation_ids, self.invitation_repository.find_by_ids
            )
            lists = await self._batch(
                "lists", list_ids, self.task_list_repository.find_by_ids
            )
            inviters = await self._batch(
                "inviters", inviter_ids, self.user_repository.find_by_ids
            )

            invitations_by_id = {i.id: i for i in invitations}
            titles_by_id = {tl.id: tl.title for tl in lists}
            emails_by_id = {u.id: u.email.root for u in inviters}

            enriched = [
                EnrichedNotification(
                    notification=n,
                    invitation=invitations_by_id.get(n.invitation_id)
                    if n.invitation_id
                    else None,
                    list_title=titles_by_id.get(n.list_id) if n.list_id else None,
                    inviter_email=emails_by_id.get(n.invited_by)
                    if n.invited_by
                    else None,
                )
                for n in notifications
            ]
            logfire.info(
                "Notifications loaded",
                user_id=str(user_id),
                count=len(enriched),
                invitations=len(invitations_by_id),
                lists=len(titles_by_id),
                inviters=len(emails_by_id),
            )
            return enriched

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> None:
        """Mark one of the user's notifications as read.

        Raises:
            NotFoundError: If the notification does not exist or is not the user's
        """
        with logfire.span(
            "notification_service.mark_read", notification_id=str(notification_id)
        ):
            notification = await self.notification_repository.find_by_id(
                notification_id
            )
            if not notification or notification.user_id != user_id:
                raise NotFoundError("Notification", str(notification_id))
            if notification.read:
                return
            await self.notification_repository.mark_read([notification_id])

    async def mark_read_for_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> int:
        """Mark every notification of the user that references an invitation.

        Returns:
            Number of notifications updated
        """
        with logfire.span(
            "notification_service.mark_read_for_invitation",
            user_id=str(user_id),
            invitation_id=str(invitation_id),
        ):
            notifications = await self.notification_repository.find_for_invitation(
                user_id, invitation_id
            )
            unread = [n.id for n in notifications if not n.read]
            if not unread:
                return 0
            count = await self.notification_repository.mark_read(unread)
            logfire.info(
                "Invitation notifications marked read",
                invitation_id=str(invitation_id),
                count=count,
            )
            return count
