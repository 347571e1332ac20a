"""Mappers for converting between platform rows and domain models.

Rows arrive as JSON objects from the platform's query API, so every id is a
string and timestamps are ISO 8601 strings; pydantic does the coercion.
"""

from typing import Any, Dict
from uuid import UUID

from together.domain.model import (
    Invitation,
    ListMember,
    Membership,
    Notification,
    Plan,
    Subscription,
    Task,
    TaskList,
    User,
    UserList,
)
from together.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ListId,
    MemberRole,
    MembershipId,
    NotificationId,
    NotificationType,
    SubscriptionStatus,
    TaskId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert a users row to User domain model.

    Args:
        row: Row from the public users projection

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=Email(root=row["email"]),
        created_at=row.get("created_at"),
    )


def row_to_task_list(row: Dict[str, Any]) -> TaskList:
    """Convert a lists row to TaskList domain model."""
    return TaskList(
        id=ListId(_uuid(row["id"])),
        title=row["title"],
        description=row.get("description"),
        owner_id=UserId(_uuid(row["owner_id"])),
        customization=row.get("customization"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def task_list_to_dict(task_list: TaskList) -> Dict[str, Any]:
    return task_list.model_dump(mode="json")


def row_to_membership(row: Dict[str, Any]) -> Membership:
    """Convert a list_members row to Membership domain model."""
    membership_id = _optional_uuid(row.get("id"))
    return Membership(
        id=MembershipId(membership_id) if membership_id else None,
        list_id=ListId(_uuid(row["list_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        role=MemberRole(row.get("role") or MemberRole.MEMBER.value),
        created_at=row["created_at"],
    )


def membership_to_dict(membership: Membership) -> Dict[str, Any]:
    """Columns for a membership insert; the id is issued by the platform."""
    return membership.model_dump(mode="json", exclude={"id"}, exclude_none=True)


def row_to_user_list(row: Dict[str, Any]) -> UserList | None:
    """Convert a list_members row with an embedded ``lists`` object.

    Returns:
        None when the embedded list is missing (deleted or hidden)
    """
    embedded = row.get("lists")
    if not embedded:
        return None
    return UserList(
        task_list=row_to_task_list(embedded),
        role=MemberRole(row.get("role") or MemberRole.MEMBER.value),
    )


def row_to_list_member(row: Dict[str, Any]) -> ListMember:
    """Convert a ``get_list_members`` procedure row."""
    return ListMember(
        user_id=UserId(_uuid(row["user_id"])),
        email=row.get("email"),
        role=MemberRole(row.get("role") or MemberRole.MEMBER.value),
        joined_at=row.get("joined_at") or row.get("created_at"),
    )


def row_to_task(row: Dict[str, Any]) -> Task:
    """Convert a tasks row to Task domain model."""
    created_by = _optional_uuid(row.get("created_by"))
    completed_by = _optional_uuid(row.get("completed_by"))
    return Task(
        id=TaskId(_uuid(row["id"])),
        list_id=ListId(_uuid(row["list_id"])),
        title=row["title"],
        description=row.get("description"),
        completed=bool(row.get("completed", False)),
        created_by=UserId(created_by) if created_by else None,
        created_at=row["created_at"],
        completed_at=row.get("completed_at"),
        completed_by=UserId(completed_by) if completed_by else None,
    )


def task_to_dict(task: Task) -> Dict[str, Any]:
    return task.model_dump(mode="json")


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert an invitations row to Invitation domain model."""
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        list_id=ListId(_uuid(row["list_id"])),
        invited_by=UserId(_uuid(row["invited_by"])),
        email=Email(root=row["email"]),
        token=InvitationToken(root=row["token"]),
        status=InvitationStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    return invitation.model_dump(mode="json")


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert a notifications row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        type=NotificationType(row["type"]),
        data=row.get("data") or {},
        read=bool(row.get("read", False)),
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    return notification.model_dump(mode="json")


def row_to_plan(row: Dict[str, Any]) -> Plan:
    return Plan(
        id=int(row["id"]),
        name=row["name"],
        description=row.get("description"),
        features=row.get("features"),
        max_lists=row.get("max_lists"),
    )


def row_to_subscription(row: Dict[str, Any]) -> Subscription:
    """Convert a user_subscriptions row, optionally embedding its plan."""
    embedded = row.get("subscription_plans")
    return Subscription(
        user_id=UserId(_uuid(row["user_id"])),
        plan_id=row.get("plan_id"),
        status=SubscriptionStatus(row.get("status") or SubscriptionStatus.INCOMPLETE),
        stripe_customer_id=row.get("stripe_customer_id"),
        stripe_subscription_id=row.get("stripe_subscription_id"),
        current_period_start=row.get("current_period_start"),
        current_period_end=row.get("current_period_end"),
        cancel_at_period_end=bool(row.get("cancel_at_period_end", False)),
        created_at=row.get("created_at"),
        plan=row_to_plan(embedded) if embedded else None,
    )


def subscription_to_dict(subscription: Subscription) -> Dict[str, Any]:
    """Columns for an upsert; unset timestamps are left to the platform."""
    return subscription.model_dump(
        mode="json", exclude={"plan", "created_at"}, exclude_none=True
    )
