"""In-memory task list repository for testing."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from together.domain.model.task_list import Membership, TaskList
from together.domain.repository.task_list import TaskListRepository
from together.domain.value import ListId, MemberRole, MembershipId, UserId

from .store import InMemoryStore


class InMemoryTaskListRepository(TaskListRepository):
    """In-memory implementation of TaskListRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create_with_owner(
        self, title: str, description: str | None, owner_id: UserId
    ) -> TaskList:
        """Create a list and its owner membership."""
        now = datetime.now(timezone.utc)
        task_list = TaskList(
            id=ListId(uuid4()),
            title=title,
            description=description,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        self.store.lists[task_list.id] = task_list
        self.store.memberships.append(
            Membership(
                id=MembershipId(uuid4()),
                list_id=task_list.id,
                user_id=owner_id,
                role=MemberRole.OWNER,
                created_at=now,
            )
        )
        return task_list

    async def find_by_id(self, list_id: ListId) -> Optional[TaskList]:
        return self.store.lists.get(list_id)

    async def find_by_ids(self, list_ids: list[ListId]) -> list[TaskList]:
        return [self.store.lists[lid] for lid in list_ids if lid in self.store.lists]

    async def delete_cascade(self, list_id: ListId, user_id: UserId) -> bool:
        """Delete a list and every row that references it. Owner only."""
        task_list = self.store.lists.get(list_id)
        if task_list is None or task_list.owner_id != user_id:
            return False

        del self.store.lists[list_id]
        self.store.memberships = [
            m for m in self.store.memberships if m.list_id != list_id
        ]
        self.store.tasks = {
            tid: t for tid, t in self.store.tasks.items() if t.list_id != list_id
        }
        self.store.invitations = {
            iid: inv
            for iid, inv in self.store.invitations.items()
            if inv.list_id != list_id
        }
        return True
