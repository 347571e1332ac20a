"""Get list use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import ListService, TaskService
from together.domain.value import ListId, UserId

from .views import ListItem, MemberItem, TaskItem


class GetListRequest(BaseModel):
    list_id: str
    user_id: str


class GetListResponse(BaseModel):
    """Everything the list page renders."""

    list: ListItem
    tasks: list[TaskItem]
    members: list[MemberItem]


class GetListUseCase(BaseUseCase):
    """Use case for loading a list with its tasks and members."""

    def __init__(self, list_service: ListService, task_service: TaskService) -> None:
        """Initialize get list use case.

        Args:
            list_service: List domain service
            task_service: Task domain service
        """
        self.list_service = list_service
        self.task_service = task_service

    async def execute(self, request: GetListRequest) -> GetListResponse:
        """Load the list page.

        Raises:
            NotFoundError: If the list does not exist
            NotAuthorizedError: If the user is not a member
        """
        list_id = ListId(UUID(request.list_id))
        user_id = UserId(UUID(request.user_id))

        with logfire.span("get_list.execute", list_id=request.list_id):
            user_list = await self.list_service.get_list(list_id, user_id)
            tasks = await self.task_service.list_tasks(list_id, user_id)
            members = await self.list_service.get_members(list_id, user_id)

            return GetListResponse(
                list=ListItem.from_user_list(user_list),
                tasks=[TaskItem.from_task(t) for t in tasks],
                members=[MemberItem.from_member(m) for m in members],
            )
