"""Get list members use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import ListService
from together.domain.value import ListId, UserId

from .views import MemberItem


class GetMembersRequest(BaseModel):
    list_id: str
    user_id: str


class GetMembersResponse(BaseModel):
    members: list[MemberItem]


class GetMembersUseCase(BaseUseCase):
    """Use case for the members panel of a list, owner first."""

    def __init__(self, list_service: ListService) -> None:
        self.list_service = list_service

    async def execute(self, request: GetMembersRequest) -> GetMembersResponse:
        members = await self.list_service.get_members(
            ListId(UUID(request.list_id)), UserId(UUID(request.user_id))
        )
        return GetMembersResponse(members=[MemberItem.from_member(m) for m in members])
