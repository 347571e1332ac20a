"""In-memory task repository for testing."""

from typing import Any, Optional

from together.domain.model.task import Task
from together.domain.repository.task import TaskRepository
from together.domain.value import ListId, TaskId

from .store import InMemoryStore


class InMemoryTaskRepository(TaskRepository):
    """In-memory implementation of TaskRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, task_id: TaskId) -> Optional[Task]:
        return self.store.tasks.get(task_id)

    async def find_by_list(self, list_id: ListId) -> list[Task]:
        tasks = [t for t in self.store.tasks.values() if t.list_id == list_id]
        tasks.sort(key=lambda t: t.created_at, reverse=True)
        return tasks

    async def create(self, task: Task) -> Task:
        self.store.tasks[task.id] = task
        return task

    async def update(self, task_id: TaskId, values: dict[str, Any]) -> Optional[Task]:
        task = self.store.tasks.get(task_id)
        if task is None:
            return None
        updated = task.model_copy(update=values)
        self.store.tasks[task_id] = updated
        return updated

    async def delete(self, task_id: TaskId) -> bool:
        return self.store.tasks.pop(task_id, None) is not None
