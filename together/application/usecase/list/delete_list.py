"""Delete list use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import ListService
from together.domain.value import ListId, UserId


class DeleteListRequest(BaseModel):
    list_id: str
    user_id: str


class DeleteListUseCase(BaseUseCase):
    """Use case for deleting a list. Only its owner may do so."""

    def __init__(self, list_service: ListService) -> None:
        self.list_service = list_service

    async def execute(self, request: DeleteListRequest) -> None:
        await self.list_service.delete_list(
            ListId(UUID(request.list_id)), UserId(UUID(request.user_id))
        )
