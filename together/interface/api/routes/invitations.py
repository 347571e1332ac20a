"""Invitation routes."""

import logging
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError as PydanticValidationError

from together.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    RejectInvitationRequest,
    RejectInvitationResponse,
    RejectInvitationUseCase,
    ResolveInvitationRequest,
    ResolveInvitationResponse,
    ResolveInvitationUseCase,
)
from together.domain.service import JWTService
from together.interface.api.session import authenticate
from together.interface.error import BadRequestError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/invitations", tags=["invitations"], route_class=DishkaRoute
)

# Failed outcomes keep their body; only the status code varies
_FAILURE_STATUS = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_or_expired": status.HTTP_410_GONE,
    "invitation_closed": status.HTTP_409_CONFLICT,
    "accept_failed": status.HTTP_502_BAD_GATEWAY,
}


def invitation_outcome_response(
    result: AcceptInvitationResponse | RejectInvitationResponse,
):
    """The result itself on success, the same body with an error status otherwise."""
    if result.success:
        return result
    return JSONResponse(
        status_code=_FAILURE_STATUS.get(result.error or "", status.HTTP_400_BAD_REQUEST),
        content=result.model_dump(mode="json"),
    )


class CreateInvitationAPIRequest(BaseModel):
    """API request for inviting someone to a list."""

    list_id: UUID
    email: str


class AcceptInvitationAPIRequest(BaseModel):
    """Accept by ``invitation_id`` (from a notification) or ``token`` (from a link)."""

    invitation_id: UUID | None = None
    token: str | None = None


@router.post(
    "", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateInvitationResponse:
    """Invite an email address to a list.

    Args:
        request: List and invitee email
        create_invitation_use_case: Create invitation use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        authorization: Bearer token header for SDK clients

    Returns:
        The invitation and the link to share with the invitee. A registered
        invitee also gets an in-app notification.
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            list_id=str(request.list_id),
            email=request.email,
            invited_by=payload.user_id,
        )
    )


@router.get("/resolve", response_model=ResolveInvitationResponse)
async def resolve_invitation(
    resolve_invitation_use_case: FromDishka[ResolveInvitationUseCase],
    token: str = Query(min_length=1),
) -> ResolveInvitationResponse:
    """Look up an invitation by its link token. No session required.

    Unknown tokens, expired invitations and deleted lists all report
    ``valid=false`` with error ``invalid_or_expired``.
    """
    return await resolve_invitation_use_case.execute(
        ResolveInvitationRequest(token=token)
    )


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationAPIRequest,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
):
    """Join the invitation's list. Safe to repeat.

    The body always carries an explicit ``success``; failures also name the
    ``error`` and, for partial failures, the ``failed_step``.
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    try:
        use_case_request = AcceptInvitationRequest(
            user_id=payload.user_id,
            invitation_id=str(request.invitation_id) if request.invitation_id else None,
            token=request.token,
        )
    except PydanticValidationError:
        raise BadRequestError("invitation_id or token is required")

    result = await accept_invitation_use_case.execute(use_case_request)
    logger.info(
        f"Accept invitation for user {payload.user_id}: success={result.success}"
    )
    return invitation_outcome_response(result)


@router.post("/{invitation_id}/reject", response_model=RejectInvitationResponse)
async def reject_invitation(
    invitation_id: UUID,
    reject_invitation_use_case: FromDishka[RejectInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
):
    """Decline an invitation. Rejecting twice is a no-op."""
    payload = authenticate(jwt_service, auth_token, authorization)
    result = await reject_invitation_use_case.execute(
        RejectInvitationRequest(
            invitation_id=str(invitation_id), user_id=payload.user_id
        )
    )
    return invitation_outcome_response(result)
