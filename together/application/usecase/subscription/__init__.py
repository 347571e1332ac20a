"""Subscription and payment use cases."""

from .create_checkout import (
    CreateCheckoutRequest,
    CreateCheckoutResponse,
    CreateCheckoutUseCase,
)
from .get_subscription import (
    GetSubscriptionRequest,
    GetSubscriptionResponse,
    GetSubscriptionUseCase,
    SubscriptionItem,
)
from .handle_webhook import (
    HandleWebhookRequest,
    HandleWebhookResponse,
    HandleWebhookUseCase,
)
from .update_subscription import UpdateSubscriptionRequest, UpdateSubscriptionUseCase

__all__ = [
    "CreateCheckoutRequest",
    "CreateCheckoutResponse",
    "CreateCheckoutUseCase",
    "GetSubscriptionRequest",
    "GetSubscriptionResponse",
    "GetSubscriptionUseCase",
    "HandleWebhookRequest",
    "HandleWebhookResponse",
    "HandleWebhookUseCase",
    "SubscriptionItem",
    "UpdateSubscriptionRequest",
    "UpdateSubscriptionUseCase",
]
