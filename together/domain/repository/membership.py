"""Membership repository interface."""

from abc import ABC, abstractmethod

from together.domain.model.task_list import ListMember, Membership, UserList
from together.domain.value import ListId, UserId


class MembershipRepository(ABC):
    """Repository for list membership rows."""

    @abstractmethod
    async def find(self, list_id: ListId, user_id: UserId) -> Membership | None:
        """Find the membership row for a (list, user) pair.

        Args:
            list_id: List ID
            user_id: User ID

        Returns:
            The row if present, None otherwise
        """
        pass

    @abstractmethod
    async def add(self, membership: Membership) -> Membership:
        """Insert a membership row.

        Args:
            membership: Row to insert

        Returns:
            The stored row

        Raises:
            ConflictError: If a row for (list_id, user_id) already exists
        """
        pass

    @abstractmethod
    async def is_member(self, list_id: ListId, user_id: UserId) -> bool:
        """Check membership through the platform's membership procedure."""
        pass

    @abstractmethod
    async def find_user_lists(self, user_id: UserId) -> list[UserList]:
        """Raw membership rows of a user joined with their lists.

        Rows are returned as stored, newest list first. The same list may
        appear more than once; rows whose list no longer exists are dropped.

        Args:
            user_id: User ID

        Returns:
            One entry per membership row
        """
        pass

    @abstractmethod
    async def list_members(self, list_id: ListId) -> list[ListMember]:
        """Members of a list with their emails."""
        pass
