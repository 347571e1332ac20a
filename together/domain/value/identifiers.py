"""Strongly typed identifiers for ListTogether entities.

All identifiers are opaque UUIDs issued by the platform.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ListId = NewType("ListId", UUID)
TaskId = NewType("TaskId", UUID)
MembershipId = NewType("MembershipId", UUID)
InvitationId = NewType("InvitationId", UUID)
NotificationId = NewType("NotificationId", UUID)
