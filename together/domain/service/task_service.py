"""Task domain service."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire

from together.domain.error import NotAuthorizedError, NotFoundError
from together.domain.model.realtime import ChangeEvent, task_topic
from together.domain.model.task import Task
from together.domain.repository import MembershipRepository, TaskRepository
from together.domain.value import ChangeType, ListId, TaskId, UserId

from .base import Service
from .realtime_service import ChangeFeed


class TaskService(Service):
    """Domain service for tasks.

    Every successful mutation is published on the list's task topic so other
    viewers of the list converge without reloading.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        membership_repository: MembershipRepository,
        change_feed: ChangeFeed,
    ) -> None:
        self.task_repository = task_repository
        self.membership_repository = membership_repository
        self.change_feed = change_feed

    async def _ensure_member(self, list_id: ListId, user_id: UserId) -> None:
        if not await self.membership_repository.is_member(list_id, user_id):
            raise NotAuthorizedError("list", str(list_id), str(user_id))

    async def _get_for_member(self, task_id: TaskId, user_id: UserId) -> Task:
        task = await self.task_repository.find_by_id(task_id)
        if not task:
            raise NotFoundError("Task", str(task_id))
        await self._ensure_member(task.list_id, user_id)
        return task

    async def _publish(
        self,
        change: ChangeType,
        list_id: ListId,
        record: dict[str, Any] | None = None,
        old_record: dict[str, Any] | None = None,
    ) -> None:
        await self.change_feed.publish(
            ChangeEvent(
                topic=task_topic(list_id),
                type=change,
                table="tasks",
                record=record,
                old_record=old_record,
            )
        )

    async def list_tasks(self, list_id: ListId, user_id: UserId) -> list[Task]:
        """Tasks of a list, newest first."""
        with logfire.span("task_service.list_tasks", list_id=str(list_id)):
            await self._ensure_member(list_id, user_id)
            return await self.task_repository.find_by_list(list_id)

    async def create_task(
        self,
        list_id: ListId,
        title: str,
        description: str | None,
        user_id: UserId,
    ) -> Task:
        """Add a task to a list the user belongs to.

        Raises:
            NotAuthorizedError: If the user is not a member of the list
        """
        with logfire.span(
            "task_service.create_task", list_id=str(list_id), user_id=str(user_id)
        ):
            await self._ensure_member(list_id, user_id)

            task = Task(
                id=TaskId(uuid4()),
                list_id=list_id,
                title=title,
                description=description,
                created_by=user_id,
                created_at=datetime.now(timezone.utc),
            )
            saved = await self.task_repository.create(task)
            logfire.info("Task created", task_id=str(saved.id), list_id=str(list_id))

            await self._publish(
                ChangeType.INSERT, list_id, record=saved.model_dump(mode="json")
            )
            return saved

    async def update_task(
        self, task_id: TaskId, values: dict[str, Any], user_id: UserId
    ) -> Task:
        """Apply a partial update to title/description."""
        with logfire.span("task_service.update_task", task_id=str(task_id)):
            task = await self._get_for_member(task_id, user_id)
            allowed = {k: v for k, v in values.items() if k in ("title", "description")}
            if not allowed:
                return task

            updated = await self.task_repository.update(task_id, allowed)
            if not updated:
                raise NotFoundError("Task", str(task_id))

            await self._publish(
                ChangeType.UPDATE, updated.list_id, record=updated.model_dump(mode="json")
            )
            return updated

    async def set_completed(
        self, task_id: TaskId, completed: bool, user_id: UserId
    ) -> Task:
        """Mark a task done or not done, recording who completed it."""
        with logfire.span(
            "task_service.set_completed", task_id=str(task_id), completed=completed
        ):
            await self._get_for_member(task_id, user_id)

            values = {
                "completed": completed,
                "completed_at": datetime.now(timezone.utc) if completed else None,
                "completed_by": user_id if completed else None,
            }
            updated = await self.task_repository.update(task_id, values)
            if not updated:
                raise NotFoundError("Task", str(task_id))

            logfire.info(
                "Task completion changed", task_id=str(task_id), completed=completed
            )
            await self._publish(
                ChangeType.UPDATE, updated.list_id, record=updated.model_dump(mode="json")
            )
            return updated

    async def delete_task(self, task_id: TaskId, user_id: UserId) -> None:
        with logfire.span("task_service.delete_task", task_id=str(task_id)):
            task = await self._get_for_member(task_id, user_id)
            if not await self.task_repository.delete(task_id):
                raise NotFoundError("Task", str(task_id))

            logfire.info("Task deleted", task_id=str(task_id))
            await self._publish(
                ChangeType.DELETE,
                task.list_id,
                old_record={"id": str(task.id), "list_id": str(task.list_id)},
            )
