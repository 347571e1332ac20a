"""Invitation entity.

An invitation binds one target email to one list. Its token is the only
credential needed to view it; accepting requires a session.
"""

from datetime import datetime, timezone

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ListId,
    UserId,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Invitation(DomainModel):
    """Invitation to join a list.

    Business rules:
    - ``pending`` transitions to exactly one of ``accepted`` / ``rejected``
    - Terminal invitations never transition again
    - A pending invitation past ``expires_at`` can no longer be used
    """

    id: InvitationId
    list_id: ListId
    invited_by: UserId
    email: Email
    token: InvitationToken
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or _utcnow()
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now >= expires_at

    def is_effective(self, now: datetime | None = None) -> bool:
        """Pending and not yet expired."""
        return self.status == InvitationStatus.PENDING and not self.is_expired(now)
