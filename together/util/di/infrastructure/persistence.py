"""Persistence infrastructure providers."""

from dishka import Scope, provide

from together.adapter.platform.gateway import PlatformGateway, ServiceGateway
from together.domain.repository import (
    InvitationRepository,
    MembershipRepository,
    NotificationRepository,
    SubscriptionRepository,
    TaskListRepository,
    TaskRepository,
    UserRepository,
)
from together.persistence.repository.platform import (
    PlatformInvitationRepository,
    PlatformMembershipRepository,
    PlatformNotificationRepository,
    PlatformSubscriptionRepository,
    PlatformTaskListRepository,
    PlatformTaskRepository,
    PlatformUserRepository,
)
from together.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"
    __depends_on__ = {"platform"}


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider backed by the platform gateway."""

    __is_mock__ = False

    scope = Scope.REQUEST

    @provide
    def get_user_repository(self, gateway: PlatformGateway) -> UserRepository:
        """Provide User repository."""
        return PlatformUserRepository(gateway)

    @provide
    def get_task_list_repository(self, gateway: PlatformGateway) -> TaskListRepository:
        """Provide TaskList repository."""
        return PlatformTaskListRepository(gateway)

    @provide
    def get_membership_repository(self, gateway: PlatformGateway) -> MembershipRepository:
        """Provide Membership repository."""
        return PlatformMembershipRepository(gateway)

    @provide
    def get_task_repository(self, gateway: PlatformGateway) -> TaskRepository:
        """Provide Task repository."""
        return PlatformTaskRepository(gateway)

    @provide
    def get_invitation_repository(self, gateway: PlatformGateway) -> InvitationRepository:
        """Provide Invitation repository."""
        return PlatformInvitationRepository(gateway)

    @provide
    def get_notification_repository(
        self, gateway: PlatformGateway
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PlatformNotificationRepository(gateway)

    @provide
    def get_subscription_repository(
        self, gateway: ServiceGateway
    ) -> SubscriptionRepository:
        """Provide Subscription repository.

        Bound to the service-role gateway: webhook deliveries carry no user
        session.
        """
        return PlatformSubscriptionRepository(gateway)
