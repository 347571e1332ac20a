"""Reject invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.error import InvitationError, NotFoundError
from together.domain.service import InvitationService
from together.domain.value import InvitationId, UserId


class RejectInvitationRequest(BaseModel):
    invitation_id: str
    user_id: str


class RejectInvitationResponse(BaseModel):
    """Outcome of a rejection; ``success`` is always explicit."""

    success: bool
    invitation_id: str
    error: str | None = None
    message: str | None = None


class RejectInvitationUseCase(BaseUseCase):
    """Use case for declining an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: RejectInvitationRequest
    ) -> RejectInvitationResponse:
        try:
            await self.invitation_service.reject(
                InvitationId(UUID(request.invitation_id)),
                UserId(UUID(request.user_id)),
            )
        except InvitationError as e:
            return RejectInvitationResponse(
                success=False,
                invitation_id=request.invitation_id,
                error=e.code,
                message=str(e),
            )
        except NotFoundError as e:
            return RejectInvitationResponse(
                success=False,
                invitation_id=request.invitation_id,
                error="not_found",
                message=str(e),
            )

        return RejectInvitationResponse(success=True, invitation_id=request.invitation_id)
