"""Repository implementations backed by the managed platform."""

from .invitation import PlatformInvitationRepository
from .membership import PlatformMembershipRepository
from .notification import PlatformNotificationRepository
from .subscription import PlatformSubscriptionRepository
from .task import PlatformTaskRepository
from .task_list import PlatformTaskListRepository
from .user import PlatformUserRepository

__all__ = [
    "PlatformInvitationRepository",
    "PlatformMembershipRepository",
    "PlatformNotificationRepository",
    "PlatformSubscriptionRepository",
    "PlatformTaskListRepository",
    "PlatformTaskRepository",
    "PlatformUserRepository",
]
