"""Task list repository interface."""

from abc import ABC, abstractmethod

from together.domain.model.task_list import TaskList
from together.domain.value import ListId, UserId


class TaskListRepository(ABC):
    """Repository for TaskList entity."""

    @abstractmethod
    async def create_with_owner(
        self, title: str, description: str | None, owner_id: UserId
    ) -> TaskList:
        """Create a list and its owner membership in one platform call.

        Args:
            title: List title
            description: Optional description
            owner_id: Creator, recorded with role ``owner``

        Returns:
            The created list
        """
        pass

    @abstractmethod
    async def find_by_id(self, list_id: ListId) -> TaskList | None:
        """Find a list by ID.

        Args:
            list_id: The list's unique identifier

        Returns:
            The list if found and visible, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, list_ids: list[ListId]) -> list[TaskList]:
        """Batch lookup. Unknown or deleted lists are skipped."""
        pass

    @abstractmethod
    async def delete_cascade(self, list_id: ListId, user_id: UserId) -> bool:
        """Delete a list with its tasks, members and invitations.

        Args:
            list_id: List to delete
            user_id: User requesting the deletion

        Returns:
            False when the user is not allowed to delete the list
        """
        pass
