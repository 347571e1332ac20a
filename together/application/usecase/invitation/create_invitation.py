"""Create invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.model import Invitation
from together.domain.service import InvitationService
from together.domain.value import InvitationStatus, ListId, UserId


class InvitationItem(BaseModel):
    """Invitation in API responses."""

    id: str
    list_id: str
    invited_by: str
    email: str
    token: str
    status: InvitationStatus
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            id=str(invitation.id),
            list_id=str(invitation.list_id),
            invited_by=str(invitation.invited_by),
            email=invitation.email.root,
            token=invitation.token.root,
            status=invitation.status,
            created_at=invitation.created_at,
            expires_at=invitation.expires_at,
        )


class CreateInvitationRequest(BaseModel):
    """Request to invite an email address to a list."""

    list_id: str
    email: str
    invited_by: str


class CreateInvitationResponse(BaseModel):
    """Created invitation and the link to share."""

    invitation: InvitationItem
    invite_link: str


class CreateInvitationUseCase(BaseUseCase):
    """Use case for sharing a list by email."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize create invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: CreateInvitationRequest
    ) -> CreateInvitationResponse:
        """Create the invitation and build its deep link.

        Raises:
            ValidationError: If the email is malformed
            NotAuthorizedError: If the inviter does not belong to the list
        """
        with logfire.span("create_invitation.execute", list_id=request.list_id):
            invitation = await self.invitation_service.create_invitation(
                ListId(UUID(request.list_id)),
                request.email,
                UserId(UUID(request.invited_by)),
            )
            return CreateInvitationResponse(
                invitation=InvitationItem.from_invitation(invitation),
                invite_link=self.invitation_service.build_link(invitation.token),
            )
