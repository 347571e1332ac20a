"""Task routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from together.application.usecase.list import TaskItem
from together.application.usecase.task import (
    CreateTaskRequest,
    CreateTaskUseCase,
    DeleteTaskRequest,
    DeleteTaskUseCase,
    ListTasksRequest,
    ListTasksResponse,
    ListTasksUseCase,
    UpdateTaskRequest,
    UpdateTaskUseCase,
)
from together.domain.service import JWTService
from together.interface.api.session import authenticate

router = APIRouter(prefix="/api", tags=["tasks"], route_class=DishkaRoute)


class CreateTaskAPIRequest(BaseModel):
    """API request for adding a task."""

    title: str
    description: str | None = Field(default=None, max_length=5000)


class UpdateTaskAPIRequest(BaseModel):
    """Partial task update; omitted fields are left unchanged."""

    title: str | None = None
    description: str | None = Field(default=None, max_length=5000)
    completed: bool | None = None


@router.get("/lists/{list_id}/tasks", response_model=ListTasksResponse)
async def list_tasks(
    list_id: UUID,
    list_tasks_use_case: FromDishka[ListTasksUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListTasksResponse:
    """Tasks of a list, newest first."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await list_tasks_use_case.execute(
        ListTasksRequest(list_id=str(list_id), user_id=payload.user_id)
    )


@router.post(
    "/lists/{list_id}/tasks",
    response_model=TaskItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    list_id: UUID,
    request: CreateTaskAPIRequest,
    create_task_use_case: FromDishka[CreateTaskUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> TaskItem:
    """Add a task to a list.

    Args:
        list_id: List to add the task to
        request: Task title and description
        create_task_use_case: Create task use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        authorization: Bearer token header for SDK clients

    Returns:
        The created task; list subscribers receive it as an insert event
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    return await create_task_use_case.execute(
        CreateTaskRequest(
            list_id=str(list_id),
            user_id=payload.user_id,
            title=request.title,
            description=request.description,
        )
    )


@router.patch("/tasks/{task_id}", response_model=TaskItem)
async def update_task(
    task_id: UUID,
    request: UpdateTaskAPIRequest,
    update_task_use_case: FromDishka[UpdateTaskUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> TaskItem:
    """Edit a task or toggle its completion."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await update_task_use_case.execute(
        UpdateTaskRequest(
            task_id=str(task_id),
            user_id=payload.user_id,
            title=request.title,
            description=request.description,
            completed=request.completed,
        )
    )


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    delete_task_use_case: FromDishka[DeleteTaskUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> None:
    payload = authenticate(jwt_service, auth_token, authorization)
    await delete_task_use_case.execute(
        DeleteTaskRequest(task_id=str(task_id), user_id=payload.user_id)
    )
