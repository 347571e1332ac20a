"""Task list and membership entities."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import ListId, MemberRole, MembershipId, UserId


class TaskList(DomainModel):
    """A shared to-do list."""

    id: ListId
    title: str
    description: Optional[str] = None
    owner_id: UserId
    customization: Optional[dict[str, Any]] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None


class Membership(DomainModel):
    """Row linking a user to a list.

    Business rules:
    - The creator gets an ``owner`` row when the list is created
    - Accepting an invitation adds a ``member`` row
    - At most one row per (list_id, user_id)
    """

    id: Optional[MembershipId] = None
    list_id: ListId
    user_id: UserId
    role: MemberRole = MemberRole.MEMBER
    created_at: datetime = Field(default_factory=datetime.now)


class UserList(DomainModel):
    """A list as seen by one user, with that user's role."""

    task_list: TaskList
    role: MemberRole

    @property
    def is_owner(self) -> bool:
        return self.role == MemberRole.OWNER


class ListMember(DomainModel):
    """Member entry shown on the list page."""

    user_id: UserId
    email: Optional[str] = None
    role: MemberRole
    joined_at: Optional[datetime] = None
