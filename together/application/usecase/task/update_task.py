"""Update task use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from together.application.usecase.base import BaseUseCase
from together.application.usecase.list.views import TaskItem
from together.domain.error import ValidationError
from together.domain.service import TaskService
from together.domain.value import TaskId, TaskTitle, UserId


class UpdateTaskRequest(BaseModel):
    """Partial task update. Unset fields are left unchanged."""

    task_id: str
    user_id: str
    title: str | None = None
    description: str | None = None
    completed: bool | None = None


class UpdateTaskUseCase(BaseUseCase):
    """Use case for editing a task or toggling its completion."""

    def __init__(self, task_service: TaskService) -> None:
        self.task_service = task_service

    async def execute(self, request: UpdateTaskRequest) -> TaskItem:
        """Apply the update.

        Raises:
            ValidationError: If the new title is empty or too long
            NotFoundError: If the task does not exist
            NotAuthorizedError: If the user is not a member of the task's list
        """
        task_id = TaskId(UUID(request.task_id))
        user_id = UserId(UUID(request.user_id))

        values: dict[str, str | None] = {}
        if request.title is not None:
            try:
                values["title"] = TaskTitle(root=request.title).root
            except PydanticValidationError:
                raise ValidationError("Task title must be 1-500 characters")
        if "description" in request.model_fields_set:
            values["description"] = request.description

        with logfire.span("update_task.execute", task_id=request.task_id):
            task = await self.task_service.update_task(task_id, values, user_id)
            if request.completed is not None and request.completed != task.completed:
                task = await self.task_service.set_completed(
                    task_id, request.completed, user_id
                )
            return TaskItem.from_task(task)
