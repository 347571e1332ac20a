"""Subscription routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel

from together.application.usecase.subscription import (
    CreateCheckoutRequest,
    CreateCheckoutResponse,
    CreateCheckoutUseCase,
    GetSubscriptionRequest,
    GetSubscriptionResponse,
    GetSubscriptionUseCase,
    SubscriptionItem,
    UpdateSubscriptionRequest,
    UpdateSubscriptionUseCase,
)
from together.domain.service import JWTService
from together.domain.value import BillingInterval
from together.interface.api.session import authenticate

router = APIRouter(
    prefix="/api/subscriptions", tags=["subscriptions"], route_class=DishkaRoute
)


class CheckoutAPIRequest(BaseModel):
    billing: BillingInterval = BillingInterval.MONTHLY


@router.post(
    "/checkout",
    response_model=CreateCheckoutResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_checkout(
    request: CheckoutAPIRequest,
    create_checkout_use_case: FromDishka[CreateCheckoutUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateCheckoutResponse:
    """Start a hosted checkout for the Pro plan.

    The subscription only changes once the provider's webhook confirms the
    payment.

    Args:
        request: Monthly or yearly billing
        create_checkout_use_case: Create checkout use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        authorization: Bearer token header for SDK clients

    Returns:
        Checkout session ID and the URL to send the user to
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    return await create_checkout_use_case.execute(
        CreateCheckoutRequest(user_id=payload.user_id, billing=request.billing)
    )


@router.get("/me", response_model=GetSubscriptionResponse)
async def get_subscription(
    get_subscription_use_case: FromDishka[GetSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetSubscriptionResponse:
    """Latest subscription record of the current user, with its plan."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_subscription_use_case.execute(
        GetSubscriptionRequest(user_id=payload.user_id)
    )


@router.post("/cancel", response_model=SubscriptionItem)
async def cancel_subscription(
    update_subscription_use_case: FromDishka[UpdateSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SubscriptionItem:
    """Cancel at the end of the current billing period."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await update_subscription_use_case.execute(
        UpdateSubscriptionRequest(user_id=payload.user_id, cancel_at_period_end=True)
    )


@router.post("/reactivate", response_model=SubscriptionItem)
async def reactivate_subscription(
    update_subscription_use_case: FromDishka[UpdateSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SubscriptionItem:
    """Undo a scheduled cancellation."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await update_subscription_use_case.execute(
        UpdateSubscriptionRequest(user_id=payload.user_id, cancel_at_period_end=False)
    )
