"""Handle payment webhook use case."""

import logfire
from pydantic import BaseModel

from together.adapter.payment.signature import construct_event
from together.application.usecase.base import BaseUseCase
from together.config import Settings
from together.domain.service import SubscriptionService


class HandleWebhookRequest(BaseModel):
    """Raw webhook delivery.

    The body must be passed byte-for-byte as received; re-serialized JSON
    would not match the signature.
    """

    payload: bytes
    signature: str | None = None


class HandleWebhookResponse(BaseModel):
    received: bool = True
    event_type: str
    handled: bool


class HandleWebhookUseCase(BaseUseCase):
    """Use case for applying a signed payment provider event."""

    def __init__(
        self, subscription_service: SubscriptionService, settings: Settings
    ) -> None:
        """Initialize webhook use case.

        Args:
            subscription_service: Subscription domain service
            settings: Application settings (webhook secret and tolerance)
        """
        self.subscription_service = subscription_service
        self.settings = settings

    async def execute(self, request: HandleWebhookRequest) -> HandleWebhookResponse:
        """Verify, parse and dispatch the event.

        Unknown event types are acknowledged and ignored.

        Raises:
            WebhookSignatureError: Missing secret, missing or bad signature,
                or a malformed envelope. Nothing is written.
            WebhookEventError: A handled event lacks required fields
        """
        event = construct_event(
            request.payload,
            request.signature,
            self.settings.payment.webhook_secret,
            self.settings.payment.signature_tolerance_seconds,
        )

        with logfire.span("handle_webhook.execute", event_type=event.type, event_id=event.id):
            handled = await self.subscription_service.handle_event(
                event.type, event.data.object
            )
            return HandleWebhookResponse(event_type=event.type, handled=handled)
