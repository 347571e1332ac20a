"""Realtime change events."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import ChangeType, ListId, UserId


def task_topic(list_id: ListId) -> str:
    """Topic carrying task changes for one list."""
    return f"tasks:list_id={list_id}"


def notification_topic(user_id: UserId) -> str:
    """Topic carrying notification inserts for one user."""
    return f"notifications:user_id={user_id}"


class ChangeEvent(DomainModel):
    """A row change published on a topic.

    ``record`` holds the new row for inserts and updates; ``old_record``
    holds at least the primary key for deletes.
    """

    topic: str
    type: ChangeType
    table: str
    record: Optional[dict[str, Any]] = None
    old_record: Optional[dict[str, Any]] = None
    commit_timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def row_id(self) -> str | None:
        row = self.record if self.type != ChangeType.DELETE else self.old_record
        if not row or row.get("id") is None:
            return None
        return str(row["id"])
