"""List routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from together.application.usecase.list import (
    CreateListRequest,
    CreateListUseCase,
    DeleteListRequest,
    DeleteListUseCase,
    GetListRequest,
    GetListResponse,
    GetListUseCase,
    GetMembersRequest,
    GetMembersResponse,
    GetMembersUseCase,
    GetUserListsRequest,
    GetUserListsResponse,
    GetUserListsUseCase,
    ListItem,
)
from together.domain.service import JWTService
from together.interface.api.session import authenticate

router = APIRouter(prefix="/api/lists", tags=["lists"], route_class=DishkaRoute)


class CreateListAPIRequest(BaseModel):
    """API request for creating a list."""

    title: str
    description: str | None = Field(default=None, max_length=2000)


@router.get("", response_model=GetUserListsResponse)
async def get_user_lists(
    get_user_lists_use_case: FromDishka[GetUserListsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetUserListsResponse:
    """Lists the current user belongs to, one entry per list, newest first."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_user_lists_use_case.execute(
        GetUserListsRequest(user_id=payload.user_id)
    )


@router.post("", response_model=ListItem, status_code=status.HTTP_201_CREATED)
async def create_list(
    request: CreateListAPIRequest,
    create_list_use_case: FromDishka[CreateListUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListItem:
    """Create a list owned by the current user.

    Args:
        request: Title and optional description
        create_list_use_case: Create list use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        authorization: Bearer token header for SDK clients

    Returns:
        The new list with the caller as owner
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    return await create_list_use_case.execute(
        CreateListRequest(
            user_id=payload.user_id,
            title=request.title,
            description=request.description,
        )
    )


@router.get("/{list_id}", response_model=GetListResponse)
async def get_list(
    list_id: UUID,
    get_list_use_case: FromDishka[GetListUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetListResponse:
    """One list with its tasks and members. Members only."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_list_use_case.execute(
        GetListRequest(list_id=str(list_id), user_id=payload.user_id)
    )


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_list(
    list_id: UUID,
    delete_list_use_case: FromDishka[DeleteListUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> None:
    """Delete a list with its tasks, memberships and invitations.

    Only the owner may delete a list; anyone else gets 403.
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    await delete_list_use_case.execute(
        DeleteListRequest(list_id=str(list_id), user_id=payload.user_id)
    )


@router.get("/{list_id}/members", response_model=GetMembersResponse)
async def get_members(
    list_id: UUID,
    get_members_use_case: FromDishka[GetMembersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetMembersResponse:
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_members_use_case.execute(
        GetMembersRequest(list_id=str(list_id), user_id=payload.user_id)
    )
