"""Task repository interface."""

from abc import ABC, abstractmethod
from typing import Any

from together.domain.model.task import Task
from together.domain.value import ListId, TaskId


class TaskRepository(ABC):
    """Repository for Task entity."""

    @abstractmethod
    async def find_by_id(self, task_id: TaskId) -> Task | None:
        pass

    @abstractmethod
    async def find_by_list(self, list_id: ListId) -> list[Task]:
        """Tasks of a list, newest first."""
        pass

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Insert a task and return the stored row."""
        pass

    @abstractmethod
    async def update(self, task_id: TaskId, values: dict[str, Any]) -> Task | None:
        """Apply a partial update.

        Args:
            task_id: Task to update
            values: Column values to set

        Returns:
            The updated task, None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, task_id: TaskId) -> bool:
        """Delete a task. Returns False if nothing was deleted."""
        pass
