"""Resolve invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.error import InvitationInvalidError
from together.domain.service import InvitationService
from together.domain.value import InvitationStatus


class ResolveInvitationRequest(BaseModel):
    token: str


class ResolveInvitationResponse(BaseModel):
    """What the acceptance page shows before the user decides.

    ``valid`` is False with ``error`` set when the token cannot be used.
    """

    valid: bool
    invitation_id: str | None = None
    status: InvitationStatus | None = None
    list_id: str | None = None
    list_title: str | None = None
    list_description: str | None = None
    inviter_email: str | None = None
    inviter_name: str | None = None
    expires_at: datetime | None = None
    error: str | None = None
    message: str | None = None


class ResolveInvitationUseCase(BaseUseCase):
    """Use case for looking up an invitation link without a session."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: ResolveInvitationRequest
    ) -> ResolveInvitationResponse:
        """Resolve the token.

        Returns:
            The invitation details, or ``valid=False`` with
            ``error="invalid_or_expired"``
        """
        try:
            resolved = await self.invitation_service.resolve_by_token(request.token)
        except InvitationInvalidError as e:
            return ResolveInvitationResponse(valid=False, error=e.code, message=str(e))

        invitation = resolved.invitation
        inviter = resolved.inviter
        logfire.info(
            "Invitation resolved",
            invitation_id=str(invitation.id),
            status=invitation.status.value,
        )
        return ResolveInvitationResponse(
            valid=True,
            invitation_id=str(invitation.id),
            status=invitation.status,
            list_id=str(resolved.task_list.id),
            list_title=resolved.task_list.title,
            list_description=resolved.task_list.description,
            inviter_email=inviter.email.root if inviter else None,
            inviter_name=inviter.display_name if inviter else None,
            expires_at=invitation.expires_at,
        )
