"""Task list domain service."""

import logfire

from together.domain.error import NotAuthorizedError, NotFoundError
from together.domain.model.task_list import ListMember, TaskList, UserList
from together.domain.repository import MembershipRepository, TaskListRepository
from together.domain.value import ListId, MemberRole, UserId

from .base import Service


def deduplicate_memberships(rows: list[UserList]) -> list[UserList]:
    """Collapse membership rows to one entry per list.

    The first row seen for a list keeps its position; a later ``owner`` row
    replaces it so an owner always sees the list as owned.

    Args:
        rows: Raw membership rows, possibly repeating a list

    Returns:
        One entry per list id, in first-seen order
    """
    by_list: dict[ListId, UserList] = {}
    for row in rows:
        list_id = row.task_list.id
        if list_id not in by_list or row.role == MemberRole.OWNER:
            by_list[list_id] = row
    return list(by_list.values())


class ListService(Service):
    """Domain service for lists and their members."""

    def __init__(
        self,
        task_list_repository: TaskListRepository,
        membership_repository: MembershipRepository,
    ) -> None:
        """Initialize list service.

        Args:
            task_list_repository: List repository
            membership_repository: Membership repository
        """
        self.task_list_repository = task_list_repository
        self.membership_repository = membership_repository

    async def create_list(
        self, title: str, description: str | None, owner_id: UserId
    ) -> TaskList:
        """Create a list owned by ``owner_id``."""
        with logfire.span("list_service.create_list", owner_id=str(owner_id)):
            task_list = await self.task_list_repository.create_with_owner(
                title, description, owner_id
            )
            logfire.info(
                "List created", list_id=str(task_list.id), owner_id=str(owner_id)
            )
            return task_list

    async def get_user_lists(self, user_id: UserId) -> list[UserList]:
        """Lists the user belongs to, one entry per list.

        Args:
            user_id: User ID

        Returns:
            Deduplicated lists, owner role preferred
        """
        with logfire.span("list_service.get_user_lists", user_id=str(user_id)):
            rows = await self.membership_repository.find_user_lists(user_id)
            lists = deduplicate_memberships(rows)
            logfire.info(
                "User lists loaded",
                user_id=str(user_id),
                raw_count=len(rows),
                count=len(lists),
            )
            return lists

    async def ensure_member(self, list_id: ListId, user_id: UserId) -> None:
        """Raise NotAuthorizedError unless the user belongs to the list."""
        if not await self.membership_repository.is_member(list_id, user_id):
            logfire.warn(
                "Membership check failed", list_id=str(list_id), user_id=str(user_id)
            )
            raise NotAuthorizedError("list", str(list_id), str(user_id))

    async def get_list(self, list_id: ListId, user_id: UserId) -> UserList:
        """Get a list with the caller's role.

        Raises:
            NotFoundError: If the list does not exist
            NotAuthorizedError: If the user is not a member
        """
        with logfire.span(
            "list_service.get_list", list_id=str(list_id), user_id=str(user_id)
        ):
            task_list = await self.task_list_repository.find_by_id(list_id)
            if not task_list:
                raise NotFoundError("List", str(list_id))

            await self.ensure_member(list_id, user_id)

            role = (
                MemberRole.OWNER if task_list.owner_id == user_id else MemberRole.MEMBER
            )
            return UserList(task_list=task_list, role=role)

    async def delete_list(self, list_id: ListId, user_id: UserId) -> None:
        """Delete a list with everything attached to it.

        Raises:
            NotAuthorizedError: If the user may not delete the list
        """
        with logfire.span(
            "list_service.delete_list", list_id=str(list_id), user_id=str(user_id)
        ):
            deleted = await self.task_list_repository.delete_cascade(list_id, user_id)
            if not deleted:
                raise NotAuthorizedError("list", str(list_id), str(user_id))
            logfire.info("List deleted", list_id=str(list_id))

    async def get_members(self, list_id: ListId, user_id: UserId) -> list[ListMember]:
        """Members of a list, owners first."""
        await self.ensure_member(list_id, user_id)
        members = await self.membership_repository.list_members(list_id)
        return sorted(members, key=lambda m: m.role != MemberRole.OWNER)
