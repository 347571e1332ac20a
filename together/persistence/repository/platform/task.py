"""Platform implementation of Task repository."""

from typing import Any, Optional

from pydantic_core import to_jsonable_python

from together.adapter.platform.gateway import eq
from together.domain.model import Task
from together.domain.repository import TaskRepository
from together.domain.value import ListId, TaskId
from together.persistence.mappers import row_to_task, task_to_dict

from .base import PlatformRepository


class PlatformTaskRepository(PlatformRepository, TaskRepository):
    """Rows of the ``tasks`` table."""

    async def find_by_id(self, task_id: TaskId) -> Optional[Task]:
        result = await self.gateway.select("tasks", filters=[eq("id", task_id)])
        rows = self._rows("tasks.find_by_id", result)
        return row_to_task(rows[0]) if rows else None

    async def find_by_list(self, list_id: ListId) -> list[Task]:
        result = await self.gateway.select(
            "tasks", filters=[eq("list_id", list_id)], order="created_at.desc"
        )
        return [row_to_task(row) for row in self._rows("tasks.find_by_list", result)]

    async def create(self, task: Task) -> Task:
        result = await self.gateway.insert("tasks", task_to_dict(task))
        rows = self._rows("tasks.create", result)
        return row_to_task(rows[0]) if rows else task

    async def update(self, task_id: TaskId, values: dict[str, Any]) -> Optional[Task]:
        result = await self.gateway.update(
            "tasks", to_jsonable_python(values), [eq("id", task_id)]
        )
        rows = self._rows("tasks.update", result)
        return row_to_task(rows[0]) if rows else None

    async def delete(self, task_id: TaskId) -> bool:
        result = await self.gateway.delete("tasks", [eq("id", task_id)])
        return bool(self._rows("tasks.delete", result))
