"""Platform implementation of TaskList repository."""

from typing import Optional
from uuid import UUID

from together.adapter.platform.gateway import eq, in_
from together.domain.error import RepositoryError
from together.domain.model import TaskList
from together.domain.repository import TaskListRepository
from together.domain.value import ListId, UserId
from together.persistence.mappers import row_to_task_list

from .base import PlatformRepository


class PlatformTaskListRepository(PlatformRepository, TaskListRepository):
    """Lists stored in the ``lists`` table.

    Creation and deletion go through stored procedures so the owner row
    and the cascade happen in one transaction on the platform side.
    """

    async def create_with_owner(
        self, title: str, description: str | None, owner_id: UserId
    ) -> TaskList:
        """Create a list via ``create_list_with_owner``.

        Args:
            title: List title
            description: Optional description
            owner_id: Creator

        Returns:
            The created list
        """
        result = await self.gateway.rpc(
            "create_list_with_owner",
            {
                "p_title": title,
                "p_description": description or "",
                "p_owner_id": str(owner_id),
            },
        )
        data = self._unwrap("lists.create_with_owner", result)
        if isinstance(data, list):
            data = data[0] if data else None
        if isinstance(data, dict):
            return row_to_task_list(data)

        # Procedure returned the bare id
        if data is None:
            raise RepositoryError("lists.create_with_owner", "no list returned")
        created = await self.find_by_id(ListId(UUID(str(data))))
        if created is None:
            raise RepositoryError("lists.create_with_owner", "created list not readable")
        return created

    async def find_by_id(self, list_id: ListId) -> Optional[TaskList]:
        result = await self.gateway.select("lists", filters=[eq("id", list_id)])
        rows = self._rows("lists.find_by_id", result)
        return row_to_task_list(rows[0]) if rows else None

    async def find_by_ids(self, list_ids: list[ListId]) -> list[TaskList]:
        if not list_ids:
            return []
        result = await self.gateway.select(
            "lists", "id,title,owner_id,created_at", [in_("id", list_ids)]
        )
        return [row_to_task_list(row) for row in self._rows("lists.find_by_ids", result)]

    async def delete_cascade(self, list_id: ListId, user_id: UserId) -> bool:
        """Delete via ``delete_list_cascade``; the procedure checks ownership."""
        result = await self.gateway.rpc(
            "delete_list_cascade",
            {"p_list_id": str(list_id), "p_user_id": str(user_id)},
        )
        return bool(self._unwrap("lists.delete_cascade", result))
