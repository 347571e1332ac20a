"""Response items shared by list and task use cases."""

from datetime import datetime

from pydantic import BaseModel

from together.domain.model import ListMember, Task, UserList
from together.domain.value import MemberRole


class ListItem(BaseModel):
    """A list as shown to one user."""

    id: str
    title: str
    description: str | None = None
    owner_id: str
    role: MemberRole
    is_owner: bool
    created_at: datetime

    @classmethod
    def from_user_list(cls, user_list: UserList) -> "ListItem":
        task_list = user_list.task_list
        return cls(
            id=str(task_list.id),
            title=task_list.title,
            description=task_list.description,
            owner_id=str(task_list.owner_id),
            role=user_list.role,
            is_owner=user_list.is_owner,
            created_at=task_list.created_at,
        )


class TaskItem(BaseModel):
    """Task in API responses."""

    id: str
    list_id: str
    title: str
    description: str | None = None
    completed: bool
    created_by: str | None = None
    created_at: datetime
    completed_at: datetime | None = None
    completed_by: str | None = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskItem":
        return cls(
            id=str(task.id),
            list_id=str(task.list_id),
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_by=str(task.created_by) if task.created_by else None,
            created_at=task.created_at,
            completed_at=task.completed_at,
            completed_by=str(task.completed_by) if task.completed_by else None,
        )


class MemberItem(BaseModel):
    """Member of a list."""

    user_id: str
    email: str | None = None
    role: MemberRole
    joined_at: datetime | None = None

    @classmethod
    def from_member(cls, member: ListMember) -> "MemberItem":
        return cls(
            user_id=str(member.user_id),
            email=member.email,
            role=member.role,
            joined_at=member.joined_at,
        )
