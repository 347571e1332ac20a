"""Application layer DI providers."""

from dishka import Scope, provide

from together.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
)
from together.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
    RejectInvitationUseCase,
    ResolveInvitationUseCase,
)
from together.application.usecase.list import (
    CreateListUseCase,
    DeleteListUseCase,
    GetDashboardUseCase,
    GetListUseCase,
    GetMembersUseCase,
    GetUserListsUseCase,
)
from together.application.usecase.notification import (
    GetNotificationsUseCase,
    MarkNotificationReadUseCase,
)
from together.application.usecase.subscription import (
    CreateCheckoutUseCase,
    GetSubscriptionUseCase,
    HandleWebhookUseCase,
    UpdateSubscriptionUseCase,
)
from together.application.usecase.task import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
)
from together.config import Settings
from together.domain.repository import UserRepository
from together.domain.service import (
    AuthService,
    InvitationService,
    ListService,
    NotificationService,
    SubscriptionService,
    TaskService,
)
from together.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_register_use_case(self, auth_service: AuthService) -> RegisterUseCase:
        return RegisterUseCase(auth_service=auth_service)

    @provide
    def get_login_use_case(self, auth_service: AuthService) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(auth_service=auth_service)

    @provide
    def get_logout_use_case(self, auth_service: AuthService) -> LogoutUseCase:
        return LogoutUseCase(auth_service=auth_service)

    @provide
    def get_current_user_use_case(
        self, auth_service: AuthService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(auth_service=auth_service)

    # List use cases
    @provide
    def get_create_list_use_case(self, list_service: ListService) -> CreateListUseCase:
        return CreateListUseCase(list_service=list_service)

    @provide
    def get_user_lists_use_case(self, list_service: ListService) -> GetUserListsUseCase:
        return GetUserListsUseCase(list_service=list_service)

    @provide
    def get_list_use_case(
        self, list_service: ListService, task_service: TaskService
    ) -> GetListUseCase:
        """Provide list page use case."""
        return GetListUseCase(list_service=list_service, task_service=task_service)

    @provide
    def get_delete_list_use_case(self, list_service: ListService) -> DeleteListUseCase:
        return DeleteListUseCase(list_service=list_service)

    @provide
    def get_members_use_case(self, list_service: ListService) -> GetMembersUseCase:
        return GetMembersUseCase(list_service=list_service)

    @provide
    def get_dashboard_use_case(
        self,
        list_service: ListService,
        notification_service: NotificationService,
        subscription_service: SubscriptionService,
    ) -> GetDashboardUseCase:
        """Provide dashboard use case."""
        return GetDashboardUseCase(
            list_service=list_service,
            notification_service=notification_service,
            subscription_service=subscription_service,
        )

    # Task use cases
    @provide
    def get_list_tasks_use_case(self, task_service: TaskService) -> ListTasksUseCase:
        return ListTasksUseCase(task_service=task_service)

    @provide
    def get_create_task_use_case(self, task_service: TaskService) -> CreateTaskUseCase:
        return CreateTaskUseCase(task_service=task_service)

    @provide
    def get_update_task_use_case(self, task_service: TaskService) -> UpdateTaskUseCase:
        return UpdateTaskUseCase(task_service=task_service)

    @provide
    def get_delete_task_use_case(self, task_service: TaskService) -> DeleteTaskUseCase:
        return DeleteTaskUseCase(task_service=task_service)

    # Invitation use cases
    @provide
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_resolve_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ResolveInvitationUseCase:
        return ResolveInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_reject_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> RejectInvitationUseCase:
        return RejectInvitationUseCase(invitation_service=invitation_service)

    # Notification use cases
    @provide
    def get_notifications_use_case(
        self, notification_service: NotificationService
    ) -> GetNotificationsUseCase:
        return GetNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        return MarkNotificationReadUseCase(notification_service=notification_service)

    # Subscription use cases
    @provide
    def get_handle_webhook_use_case(
        self, subscription_service: SubscriptionService, settings: Settings
    ) -> HandleWebhookUseCase:
        """Provide payment webhook use case."""
        return HandleWebhookUseCase(
            subscription_service=subscription_service, settings=settings
        )

    @provide
    def get_create_checkout_use_case(
        self,
        subscription_service: SubscriptionService,
        user_repository: UserRepository,
        settings: Settings,
    ) -> CreateCheckoutUseCase:
        """Provide checkout use case."""
        return CreateCheckoutUseCase(
            subscription_service=subscription_service,
            user_repository=user_repository,
            settings=settings,
        )

    @provide
    def get_subscription_use_case(
        self, subscription_service: SubscriptionService
    ) -> GetSubscriptionUseCase:
        return GetSubscriptionUseCase(subscription_service=subscription_service)

    @provide
    def get_update_subscription_use_case(
        self, subscription_service: SubscriptionService
    ) -> UpdateSubscriptionUseCase:
        return UpdateSubscriptionUseCase(subscription_service=subscription_service)
