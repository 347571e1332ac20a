"""Platform implementation of Membership repository."""

from typing import Optional

from together.adapter.platform.gateway import eq
from together.domain.error import RepositoryError
from together.domain.model import ListMember, Membership, UserList
from together.domain.repository import MembershipRepository
from together.domain.value import ListId, UserId
from together.persistence.mappers import (
    membership_to_dict,
    row_to_list_member,
    row_to_membership,
    row_to_user_list,
)

from .base import PlatformRepository


class PlatformMembershipRepository(PlatformRepository, MembershipRepository):
    """Rows of the ``list_members`` table."""

    async def find(self, list_id: ListId, user_id: UserId) -> Optional[Membership]:
        result = await self.gateway.select(
            "list_members",
            filters=[eq("list_id", list_id), eq("user_id", user_id)],
            limit=1,
        )
        rows = self._rows("list_members.find", result)
        return row_to_membership(rows[0]) if rows else None

    async def add(self, membership: Membership) -> Membership:
        """Insert a membership row.

        Raises:
            ConflictError: If the (list_id, user_id) pair already exists
            RepositoryError: On any other failure
        """
        result = await self.gateway.insert("list_members", membership_to_dict(membership))
        rows = self._rows("list_members.insert", result)
        if not rows:
            raise RepositoryError("list_members.insert", "no row returned")
        return row_to_membership(rows[0])

    async def is_member(self, list_id: ListId, user_id: UserId) -> bool:
        result = await self.gateway.rpc(
            "check_list_membership",
            {"list_id_param": str(list_id), "user_id_param": str(user_id)},
        )
        return bool(self._unwrap("list_members.check", result))

    async def find_user_lists(self, user_id: UserId) -> list[UserList]:
        """Membership rows joined with their lists, newest list first.

        Rows are returned undeduplicated.
        """
        result = await self.gateway.select(
            "list_members",
            "list_id,role,lists(*)",
            [eq("user_id", user_id)],
            order="created_at.desc",
        )
        rows = self._rows("list_members.find_user_lists", result)
        user_lists = [ul for ul in map(row_to_user_list, rows) if ul is not None]
        user_lists.sort(key=lambda ul: ul.task_list.created_at, reverse=True)
        return user_lists

    async def list_members(self, list_id: ListId) -> list[ListMember]:
        result = await self.gateway.rpc(
            "get_list_members", {"list_id_param": str(list_id)}
        )
        data = self._unwrap("list_members.list", result) or []
        return [row_to_list_member(row) for row in data]
