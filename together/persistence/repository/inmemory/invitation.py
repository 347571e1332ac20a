"""In-memory invitation repository for testing."""

from typing import Optional

from together.domain.model.invitation import Invitation
from together.domain.repository.invitation import InvitationRepository
from together.domain.value import InvitationId, InvitationStatus, InvitationToken

from .store import InMemoryStore


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create(self, invitation: Invitation) -> Invitation:
        self.store.invitations[invitation.id] = invitation
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self.store.invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self.store.invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_by_ids(self, invitation_ids: list[InvitationId]) -> list[Invitation]:
        return [
            self.store.invitations[iid]
            for iid in invitation_ids
            if iid in self.store.invitations
        ]

    async def update_status(
        self, invitation_id: InvitationId, status: InvitationStatus
    ) -> Optional[Invitation]:
        invitation = self.store.invitations.get(invitation_id)
        if invitation is None:
            return None
        updated = invitation.model_copy(update={"status": status})
        self.store.invitations[invitation_id] = updated
        return updated
