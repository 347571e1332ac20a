"""Accept invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, model_validator

from together.application.usecase.base import BaseUseCase
from together.domain.error import AcceptStepError, InvitationError, NotFoundError
from together.domain.service import InvitationService
from together.domain.value import InvitationId, UserId


class AcceptInvitationRequest(BaseModel):
    """Accept by invitation ID (notification) or by token (link)."""

    user_id: str
    invitation_id: str | None = None
    token: str | None = None

    @model_validator(mode="after")
    def require_reference(self) -> "AcceptInvitationRequest":
        if not self.invitation_id and not self.token:
            raise ValueError("invitation_id or token is required")
        return self


class AcceptInvitationResponse(BaseModel):
    """Outcome of an acceptance attempt.

    ``success`` is always set explicitly. On failure ``error`` carries a
    stable code and ``failed_step`` names the step that failed, if any.
    """

    success: bool
    list_id: str | None = None
    invitation_id: str | None = None
    already_accepted: bool = False
    already_member: bool = False
    error: str | None = None
    failed_step: str | None = None
    message: str | None = None


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for joining a list through an invitation.

    Safe to call repeatedly: a second call for the same user reports
    success with ``already_accepted``.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize accept invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        user_id = UserId(UUID(request.user_id))
        invitation_id = (
            InvitationId(UUID(request.invitation_id)) if request.invitation_id else None
        )

        try:
            outcome = await self.invitation_service.accept(
                user_id, invitation_id=invitation_id, token=request.token
            )
        except AcceptStepError as e:
            logfire.error(
                "Invitation acceptance failed", step=e.step, error=str(e)
            )
            return AcceptInvitationResponse(
                success=False,
                invitation_id=request.invitation_id,
                error=e.code,
                failed_step=e.step,
                message=str(e),
            )
        except InvitationError as e:
            return AcceptInvitationResponse(
                success=False,
                invitation_id=request.invitation_id,
                error=e.code,
                message=str(e),
            )
        except NotFoundError as e:
            return AcceptInvitationResponse(
                success=False,
                invitation_id=request.invitation_id,
                error="not_found",
                message=str(e),
            )

        return AcceptInvitationResponse(
            success=True,
            list_id=str(outcome.list_id),
            invitation_id=str(outcome.invitation_id),
            already_accepted=outcome.already_accepted,
            already_member=outcome.already_member,
        )
