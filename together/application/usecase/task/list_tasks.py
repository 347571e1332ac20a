"""List tasks use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.application.usecase.list.views import TaskItem
from together.domain.service import TaskService
from together.domain.value import ListId, UserId


class ListTasksRequest(BaseModel):
    list_id: str
    user_id: str


class ListTasksResponse(BaseModel):
    """Tasks of a list, newest first."""

    tasks: list[TaskItem]


class ListTasksUseCase(BaseUseCase):
    def __init__(self, task_service: TaskService) -> None:
        self.task_service = task_service

    async def execute(self, request: ListTasksRequest) -> ListTasksResponse:
        tasks = await self.task_service.list_tasks(
            ListId(UUID(request.list_id)), UserId(UUID(request.user_id))
        )
        return ListTasksResponse(tasks=[TaskItem.from_task(t) for t in tasks])
