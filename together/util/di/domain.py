"""Domain layer DI providers."""

from dishka import Scope, provide

from together.config import PlatformSettings, Settings
from together.domain.repository import (
    InvitationRepository,
    MembershipRepository,
    NotificationRepository,
    SubscriptionRepository,
    TaskListRepository,
    TaskRepository,
    UserRepository,
)
from together.domain.service import (
    AuthClient,
    AuthService,
    ChangeFeed,
    InvitationService,
    JWTService,
    ListService,
    NotificationService,
    PaymentClient,
    SubscriptionService,
    TaskService,
)
from together.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repositories, which
    are bound to the caller's platform session.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, auth_client: AuthClient, settings: Settings) -> AuthService:
        """Provide email/password authentication domain service."""
        return AuthService(
            auth_client=auth_client,
            password_min_length=settings.auth.password_min_length,
        )

    @provide(scope=Scope.APP)
    def get_jwt_service(self, platform_settings: PlatformSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(platform_settings=platform_settings)

    @provide
    def get_list_service(
        self,
        task_list_repository: TaskListRepository,
        membership_repository: MembershipRepository,
    ) -> ListService:
        """Provide list domain service."""
        return ListService(
            task_list_repository=task_list_repository,
            membership_repository=membership_repository,
        )

    @provide
    def get_task_service(
        self,
        task_repository: TaskRepository,
        membership_repository: MembershipRepository,
        change_feed: ChangeFeed,
    ) -> TaskService:
        """Provide task domain service."""
        return TaskService(
            task_repository=task_repository,
            membership_repository=membership_repository,
            change_feed=change_feed,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        invitation_repository: InvitationRepository,
        task_list_repository: TaskListRepository,
        user_repository: UserRepository,
        change_feed: ChangeFeed,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            invitation_repository=invitation_repository,
            task_list_repository=task_list_repository,
            user_repository=user_repository,
            change_feed=change_feed,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        membership_repository: MembershipRepository,
        task_list_repository: TaskListRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
        settings: Settings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            membership_repository=membership_repository,
            task_list_repository=task_list_repository,
            user_repository=user_repository,
            notification_service=notification_service,
            link_base=settings.invite_link_base,
            expiry_days=settings.invitations.expiry_days,
        )

    @provide
    def get_subscription_service(
        self,
        subscription_repository: SubscriptionRepository,
        payment_client: PaymentClient,
        settings: Settings,
    ) -> SubscriptionService:
        """Provide subscription domain service."""
        return SubscriptionService(
            subscription_repository=subscription_repository,
            payment_client=payment_client,
            pro_plan_name=settings.payment.pro_plan_name,
            free_plan_name=settings.payment.free_plan_name,
        )
