"""Create list use case."""

from uuid import UUID

from pydantic import BaseModel, ValidationError as PydanticValidationError

from together.application.usecase.base import BaseUseCase
from together.domain.error import ValidationError
from together.domain.model import UserList
from together.domain.service import ListService
from together.domain.value import ListTitle, MemberRole, UserId

from .views import ListItem


class CreateListRequest(BaseModel):
    user_id: str
    title: str
    description: str | None = None


class CreateListUseCase(BaseUseCase):
    """Use case for creating a list owned by the caller."""

    def __init__(self, list_service: ListService) -> None:
        self.list_service = list_service

    async def execute(self, request: CreateListRequest) -> ListItem:
        """Create the list and its owner membership.

        Raises:
            ValidationError: If the title is empty or too long
        """
        try:
            title = ListTitle(root=request.title)
        except PydanticValidationError:
            raise ValidationError("List title must be 1-200 characters")

        task_list = await self.list_service.create_list(
            title.root, request.description, UserId(UUID(request.user_id))
        )
        return ListItem.from_user_list(
            UserList(task_list=task_list, role=MemberRole.OWNER)
        )
