"""Domain value objects for ListTogether."""

from together.domain.value.identifiers import (
    InvitationId,
    ListId,
    MembershipId,
    NotificationId,
    TaskId,
    UserId,
)
from together.domain.value.types import (
    BillingInterval,
    ChangeType,
    Email,
    InvitationStatus,
    InvitationToken,
    ListTitle,
    MemberRole,
    NotificationType,
    SubscriptionStatus,
    TaskTitle,
)

__all__ = [
    # Identifiers
    "UserId",
    "ListId",
    "TaskId",
    "MembershipId",
    "InvitationId",
    "NotificationId",
    # Types
    "BillingInterval",
    "ChangeType",
    "Email",
    "InvitationStatus",
    "InvitationToken",
    "ListTitle",
    "MemberRole",
    "NotificationType",
    "SubscriptionStatus",
    "TaskTitle",
]
