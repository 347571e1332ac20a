"""Mock persistence providers for testing."""

from dishka import Scope, provide

from together.domain.repository import (
    InvitationRepository,
    MembershipRepository,
    NotificationRepository,
    SubscriptionRepository,
    TaskListRepository,
    TaskRepository,
    UserRepository,
)
from together.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryMembershipRepository,
    InMemoryNotificationRepository,
    InMemoryStore,
    InMemorySubscriptionRepository,
    InMemoryTaskListRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
)
from together.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped so state survives across request scopes of one
    container; each test builds its own container and gets a fresh store.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory store."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_task_list_repository(self, store: InMemoryStore) -> TaskListRepository:
        """Provide in-memory list repository."""
        return InMemoryTaskListRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(self, store: InMemoryStore) -> MembershipRepository:
        """Provide in-memory membership repository."""
        return InMemoryMembershipRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_task_repository(self, store: InMemoryStore) -> TaskRepository:
        """Provide in-memory task repository."""
        return InMemoryTaskRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, store: InMemoryStore) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, store: InMemoryStore
    ) -> NotificationRepository:
        """Provide in-memory notification repository."""
        return InMemoryNotificationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_subscription_repository(
        self, store: InMemoryStore
    ) -> SubscriptionRepository:
        """Provide in-memory subscription repository."""
        return InMemorySubscriptionRepository(store)
