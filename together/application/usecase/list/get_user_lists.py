"""Get user lists use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import ListService
from together.domain.value import UserId

from .views import ListItem


class GetUserListsRequest(BaseModel):
    user_id: str


class GetUserListsResponse(BaseModel):
    """Lists of a user, one entry per list."""

    lists: list[ListItem]


class GetUserListsUseCase(BaseUseCase):
    """Use case for the lists shown on the dashboard."""

    def __init__(self, list_service: ListService) -> None:
        self.list_service = list_service

    async def execute(self, request: GetUserListsRequest) -> GetUserListsResponse:
        user_lists = await self.list_service.get_user_lists(UserId(UUID(request.user_id)))
        return GetUserListsResponse(
            lists=[ListItem.from_user_list(ul) for ul in user_lists]
        )
