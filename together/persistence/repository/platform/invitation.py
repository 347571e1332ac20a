"""Platform implementation of Invitation repository."""

from typing import Optional

from together.adapter.platform.gateway import eq, in_
from together.domain.error import RepositoryError
from together.domain.model import Invitation
from together.domain.repository import InvitationRepository
from together.domain.value import InvitationId, InvitationStatus, InvitationToken
from together.persistence.mappers import invitation_to_dict, row_to_invitation

from .base import PlatformRepository


class PlatformInvitationRepository(PlatformRepository, InvitationRepository):
    """Rows of the ``invitations`` table."""

    async def create(self, invitation: Invitation) -> Invitation:
        result = await self.gateway.insert("invitations", invitation_to_dict(invitation))
        rows = self._rows("invitations.create", result)
        if not rows:
            raise RepositoryError("invitations.create", "no row returned")
        return row_to_invitation(rows[0])

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        result = await self.gateway.select(
            "invitations", filters=[eq("id", invitation_id)]
        )
        rows = self._rows("invitations.find_by_id", result)
        return row_to_invitation(rows[0]) if rows else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by token.

        Readable without a session; row-level security on the platform allows
        token lookups for anonymous callers.
        """
        result = await self.gateway.select(
            "invitations", filters=[eq("token", token.root)], limit=1
        )
        rows = self._rows("invitations.find_by_token", result)
        return row_to_invitation(rows[0]) if rows else None

    async def find_by_ids(self, invitation_ids: list[InvitationId]) -> list[Invitation]:
        if not invitation_ids:
            return []
        result = await self.gateway.select(
            "invitations", filters=[in_("id", invitation_ids)]
        )
        return [
            row_to_invitation(row)
            for row in self._rows("invitations.find_by_ids", result)
        ]

    async def update_status(
        self, invitation_id: InvitationId, status: InvitationStatus
    ) -> Optional[Invitation]:
        result = await self.gateway.update(
            "invitations", {"status": status.value}, [eq("id", invitation_id)]
        )
        rows = self._rows("invitations.update_status", result)
        return row_to_invitation(rows[0]) if rows else None
