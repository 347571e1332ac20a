"""Invitation repository interface."""

from abc import ABC, abstractmethod

from together.domain.model.invitation import Invitation
from together.domain.value import InvitationId, InvitationStatus, InvitationToken


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The stored invitation
        """
        pass

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when someone opens an invitation link, possibly without a session.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, invitation_ids: list[InvitationId]) -> list[Invitation]:
        """Batch lookup. Deleted invitations are skipped."""
        pass

    @abstractmethod
    async def update_status(
        self, invitation_id: InvitationId, status: InvitationStatus
    ) -> Invitation | None:
        """Set the status of an invitation.

        Args:
            invitation_id: Invitation to update
            status: New status

        Returns:
            The updated invitation, None if it does not exist
        """
        pass
