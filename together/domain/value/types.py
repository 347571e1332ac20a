"""Domain value objects for ListTogether."""

import re
from enum import Enum

from pydantic import field_validator

from together.domain.value.common import RootValueObject

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class InvitationStatus(str, Enum):
    """Status of an invitation.

    ``pending`` moves to exactly one of the terminal states.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING


class MemberRole(str, Enum):
    """Role of a user within a list."""

    OWNER = "owner"
    MEMBER = "member"


class NotificationType(str, Enum):
    """Kinds of notification rows."""

    LIST_INVITATION = "list_invitation"


class SubscriptionStatus(str, Enum):
    """Payment provider subscription states."""

    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    PAUSED = "paused"


class BillingInterval(str, Enum):
    """Checkout billing options."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class ChangeType(str, Enum):
    """Kind of row change carried by a realtime event."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class Email(RootValueObject[str]):
    """Email address, normalized to lowercase."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not _EMAIL_RE.match(v) or len(v) > 320:
            raise ValueError("Invalid email address")
        return v

    @property
    def local_part(self) -> str:
        return self.root.split("@", 1)[0]


class InvitationToken(RootValueObject[str]):
    """URL-safe bearer token carried by an invitation link."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v


class ListTitle(RootValueObject[str]):
    """Title of a task list."""

    @field_validator("root")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 1 or len(v) > 200:
            raise ValueError("Title must be 1-200 characters")
        return v


class TaskTitle(RootValueObject[str]):
    """Title of a task."""

    @field_validator("root")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 1 or len(v) > 500:
            raise ValueError("Task title must be 1-500 characters")
        return v
