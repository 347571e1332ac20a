"""Domain services."""

from .auth_service import AuthClient, AuthService
from .base import Service
from .invitation_service import AcceptOutcome, InvitationService, ResolvedInvitation
from .jwt_service import JWTService
from .list_service import ListService, deduplicate_memberships
from .notification_service import NotificationService
from .realtime_service import ChangeFeed, ChangeHandler, FeedSubscription
from .subscription_service import PaymentClient, SubscriptionService
from .task_service import TaskService

__all__ = [
    "AcceptOutcome",
    "AuthClient",
    "AuthService",
    "ChangeFeed",
    "ChangeHandler",
    "FeedSubscription",
    "InvitationService",
    "JWTService",
    "ListService",
    "NotificationService",
    "PaymentClient",
    "ResolvedInvitation",
    "Service",
    "SubscriptionService",
    "TaskService",
    "deduplicate_memberships",
]
