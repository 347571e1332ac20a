"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .membership import InMemoryMembershipRepository
from .notification import InMemoryNotificationRepository
from .store import InMemoryStore
from .subscription import InMemorySubscriptionRepository
from .task import InMemoryTaskRepository
from .task_list import InMemoryTaskListRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInvitationRepository",
    "InMemoryMembershipRepository",
    "InMemoryNotificationRepository",
    "InMemoryStore",
    "InMemorySubscriptionRepository",
    "InMemoryTaskListRepository",
    "InMemoryTaskRepository",
    "InMemoryUserRepository",
]
