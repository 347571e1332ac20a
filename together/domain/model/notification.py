"""Notification entities."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.model.invitation import Invitation
from together.domain.value import (
    InvitationId,
    InvitationStatus,
    ListId,
    NotificationId,
    NotificationType,
    UserId,
)


def _weak_ref(data: dict[str, Any], key: str) -> UUID | None:
    value = data.get(key)
    if value is None:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None


class Notification(DomainModel):
    """Notification row.

    For ``list_invitation`` notifications, ``data`` carries
    ``{invitation_id, list_id, invited_by}``. These are lookup keys only:
    the referenced rows may have changed status or been deleted since.
    """

    id: NotificationId
    user_id: UserId
    type: NotificationType = NotificationType.LIST_INVITATION
    data: dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def invitation_id(self) -> InvitationId | None:
        ref = _weak_ref(self.data, "invitation_id")
        return InvitationId(ref) if ref else None

    @property
    def list_id(self) -> ListId | None:
        ref = _weak_ref(self.data, "list_id")
        return ListId(ref) if ref else None

    @property
    def invited_by(self) -> UserId | None:
        ref = _weak_ref(self.data, "invited_by")
        return UserId(ref) if ref else None


class EnrichedNotification(DomainModel):
    """Notification merged with the rows its payload references.

    Any reference that could not be resolved is left as None.
    """

    notification: Notification
    invitation: Optional[Invitation] = None
    list_title: Optional[str] = None
    inviter_email: Optional[str] = None

    @property
    def inviter_name(self) -> str | None:
        if not self.inviter_email:
            return None
        return self.inviter_email.split("@", 1)[0]

    @property
    def invitation_status(self) -> InvitationStatus | None:
        return self.invitation.status if self.invitation else None
