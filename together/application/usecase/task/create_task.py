"""Create task use case."""

from uuid import UUID

from pydantic import BaseModel, ValidationError as PydanticValidationError

from together.application.usecase.base import BaseUseCase
from together.application.usecase.list.views import TaskItem
from together.domain.error import ValidationError
from together.domain.service import TaskService
from together.domain.value import ListId, TaskTitle, UserId


class CreateTaskRequest(BaseModel):
    list_id: str
    user_id: str
    title: str
    description: str | None = None


class CreateTaskUseCase(BaseUseCase):
    """Use case for adding a task to a list."""

    def __init__(self, task_service: TaskService) -> None:
        self.task_service = task_service

    async def execute(self, request: CreateTaskRequest) -> TaskItem:
        """Add the task and publish it to list subscribers.

        Raises:
            ValidationError: If the title is empty or too long
            NotAuthorizedError: If the user is not a member of the list
        """
        try:
            title = TaskTitle(root=request.title)
        except PydanticValidationError:
            raise ValidationError("Task title must be 1-500 characters")

        task = await self.task_service.create_task(
            ListId(UUID(request.list_id)),
            title.root,
            request.description,
            UserId(UUID(request.user_id)),
        )
        return TaskItem.from_task(task)
