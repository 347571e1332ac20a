"""Delete task use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import TaskService
from together.domain.value import TaskId, UserId


class DeleteTaskRequest(BaseModel):
    task_id: str
    user_id: str


class DeleteTaskUseCase(BaseUseCase):
    def __init__(self, task_service: TaskService) -> None:
        self.task_service = task_service

    async def execute(self, request: DeleteTaskRequest) -> None:
        await self.task_service.delete_task(
            TaskId(UUID(request.task_id)), UserId(UUID(request.user_id))
        )
