"""Create checkout use case."""

from uuid import UUID

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.config import Settings
from together.domain.error import NotFoundError
from together.domain.repository import UserRepository
from together.domain.service import SubscriptionService
from together.domain.value import BillingInterval, UserId


class CreateCheckoutRequest(BaseModel):
    user_id: str
    billing: BillingInterval = BillingInterval.MONTHLY


class CreateCheckoutResponse(BaseModel):
    """Hosted checkout to redirect the user to."""

    session_id: str
    url: str | None = None


class CreateCheckoutUseCase(BaseUseCase):
    """Use case for starting the upgrade to Pro."""

    def __init__(
        self,
        subscription_service: SubscriptionService,
        user_repository: UserRepository,
        settings: Settings,
    ) -> None:
        """Initialize checkout use case.

        Args:
            subscription_service: Subscription domain service
            user_repository: User repository, for the customer email
            settings: Application settings (price ids and frontend URL)
        """
        self.subscription_service = subscription_service
        self.user_repository = user_repository
        self.settings = settings

    def _price_id(self, billing: BillingInterval) -> str | None:
        if billing == BillingInterval.YEARLY:
            return self.settings.payment.yearly_price_id
        return self.settings.payment.monthly_price_id

    async def execute(self, request: CreateCheckoutRequest) -> CreateCheckoutResponse:
        """Create the checkout session.

        Raises:
            NotFoundError: If the user has no public profile
            ValidationError: If the billing option has no configured price
        """
        user = await self.user_repository.find_by_id(UserId(UUID(request.user_id)))
        if user is None:
            raise NotFoundError("User", request.user_id)

        frontend = self.settings.api.frontend_url
        session = await self.subscription_service.create_checkout(
            user,
            self._price_id(request.billing),
            success_url=f"{frontend}/dashboard?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{frontend}/pro",
        )
        return CreateCheckoutResponse(session_id=session.id, url=session.url)
