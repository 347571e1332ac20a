"""Task entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import ListId, TaskId, UserId


class Task(DomainModel):
    """An item in a task list."""

    id: TaskId
    list_id: ListId
    title: str
    description: Optional[str] = None
    completed: bool = False
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    completed_by: Optional[UserId] = None
