"""In-memory membership repository for testing."""

from typing import Optional
from uuid import uuid4

from together.domain.error import ConflictError
from together.domain.model.task_list import ListMember, Membership, UserList
from together.domain.repository.membership import MembershipRepository
from together.domain.value import ListId, MembershipId, UserId

from .store import InMemoryStore


class InMemoryMembershipRepository(MembershipRepository):
    """In-memory implementation of MembershipRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find(self, list_id: ListId, user_id: UserId) -> Optional[Membership]:
        for membership in self.store.memberships:
            if membership.list_id == list_id and membership.user_id == user_id:
                return membership
        return None

    async def add(self, membership: Membership) -> Membership:
        """Insert a membership row.

        Raises:
            ConflictError: If the user already belongs to the list
        """
        if await self.find(membership.list_id, membership.user_id):
            raise ConflictError(
                f"User {membership.user_id} already belongs to list {membership.list_id}"
            )
        if membership.id is None:
            membership = membership.model_copy(update={"id": MembershipId(uuid4())})
        self.store.memberships.append(membership)
        return membership

    async def is_member(self, list_id: ListId, user_id: UserId) -> bool:
        return await self.find(list_id, user_id) is not None

    async def find_user_lists(self, user_id: UserId) -> list[UserList]:
        rows = []
        for membership in self.store.memberships:
            if membership.user_id != user_id:
                continue
            task_list = self.store.lists.get(membership.list_id)
            if task_list is None:
                continue
            rows.append(UserList(task_list=task_list, role=membership.role))

        # Newest list first
        rows.sort(key=lambda row: row.task_list.created_at, reverse=True)
        return rows

    async def list_members(self, list_id: ListId) -> list[ListMember]:
        members = []
        for membership in self.store.memberships:
            if membership.list_id != list_id:
                continue
            user = self.store.users.get(membership.user_id)
            members.append(
                ListMember(
                    user_id=membership.user_id,
                    email=user.email.root if user else None,
                    role=membership.role,
                    joined_at=membership.created_at,
                )
            )
        return members
