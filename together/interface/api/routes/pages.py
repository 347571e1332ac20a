"""Page routes.

These are the navigations the route guard protects. They return the JSON
view model of each page.
"""

import logging
from urllib.parse import quote
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from fastapi.responses import RedirectResponse

from together.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
)
from together.application.usecase.list import (
    GetDashboardRequest,
    GetDashboardResponse,
    GetDashboardUseCase,
    GetListRequest,
    GetListResponse,
    GetListUseCase,
)
from together.config import Settings
from together.domain.service import JWTService
from together.interface.api.routes.invitations import invitation_outcome_response
from together.interface.api.session import authenticate, bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"], route_class=DishkaRoute)


@router.get("/dashboard", response_model=GetDashboardResponse)
async def dashboard(
    get_dashboard_use_case: FromDishka[GetDashboardUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetDashboardResponse:
    """Lists, unread notification count and subscription summary."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_dashboard_use_case.execute(
        GetDashboardRequest(user_id=payload.user_id)
    )


@router.get("/list/{list_id}", response_model=GetListResponse)
async def list_page(
    list_id: UUID,
    get_list_use_case: FromDishka[GetListUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetListResponse:
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_list_use_case.execute(
        GetListRequest(list_id=str(list_id), user_id=payload.user_id)
    )


@router.get("/accept-invite")
async def accept_invite(
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    token: str = Query(min_length=1),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
):
    """Landing page of an invitation link.

    Signed-out visitors are sent to login with the token preserved so the
    link still works afterwards. Signed-in users join the list and land on
    it.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token or bearer_token(authorization))
    if user_id is None:
        accept_path = settings.invitations.accept_path
        return RedirectResponse(
            url=(
                f"{settings.guard.login_path}?redirect={accept_path}"
                f"&token={quote(token, safe='')}"
            ),
            status_code=status.HTTP_302_FOUND,
        )

    result = await accept_invitation_use_case.execute(
        AcceptInvitationRequest(user_id=user_id, token=token)
    )
    if not result.success:
        logger.warning(f"Invitation link rejected for user {user_id}: {result.error}")
        return invitation_outcome_response(result)

    return RedirectResponse(
        url=f"/list/{result.list_id}", status_code=status.HTTP_302_FOUND
    )
