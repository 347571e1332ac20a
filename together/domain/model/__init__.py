"""Domain model entities for ListTogether."""

from together.domain.model.invitation import Invitation
from together.domain.model.notification import EnrichedNotification, Notification
from together.domain.model.realtime import (
    ChangeEvent,
    notification_topic,
    task_topic,
)
from together.domain.model.subscription import (
    CheckoutSession,
    Plan,
    ProviderSubscription,
    Subscription,
)
from together.domain.model.task import Task
from together.domain.model.task_list import ListMember, Membership, TaskList, UserList
from together.domain.model.user import AuthSession, User

__all__ = [
    "AuthSession",
    "ChangeEvent",
    "CheckoutSession",
    "EnrichedNotification",
    "Invitation",
    "ListMember",
    "Membership",
    "Notification",
    "Plan",
    "ProviderSubscription",
    "Subscription",
    "Task",
    "TaskList",
    "User",
    "UserList",
    "notification_topic",
    "task_topic",
]
