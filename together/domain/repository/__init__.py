"""Repository interfaces for ListTogether domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from together.domain.repository.invitation import InvitationRepository
from together.domain.repository.membership import MembershipRepository
from together.domain.repository.notification import NotificationRepository
from together.domain.repository.subscription import SubscriptionRepository
from together.domain.repository.task import TaskRepository
from together.domain.repository.task_list import TaskListRepository
from together.domain.repository.user import UserRepository

__all__ = [
    "InvitationRepository",
    "MembershipRepository",
    "NotificationRepository",
    "SubscriptionRepository",
    "TaskListRepository",
    "TaskRepository",
    "UserRepository",
]
