"""Payment provider webhook routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from together.adapter.error import WebhookSignatureError
from together.adapter.payment.signature import SIGNATURE_HEADER
from together.application.usecase.subscription import (
    HandleWebhookRequest,
    HandleWebhookUseCase,
)
from together.domain.error import WebhookEventError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"], route_class=DishkaRoute)


@router.post("/stripe")
async def stripe_webhook(
    request: Request,
    handle_webhook_use_case: FromDishka[HandleWebhookUseCase],
    stripe_signature: str | None = Header(default=None, alias=SIGNATURE_HEADER),
) -> JSONResponse:
    """Receive a signed subscription event.

    The raw body is verified against the signature header before anything
    is parsed. Rejected deliveries get ``400 {"error": ...}`` and change
    nothing; accepted ones get ``{"received": true}``, including event types
    that are ignored.
    """
    payload = await request.body()

    try:
        result = await handle_webhook_use_case.execute(
            HandleWebhookRequest(payload=payload, signature=stripe_signature)
        )
    except (WebhookSignatureError, WebhookEventError) as e:
        logger.warning(f"Webhook rejected: {e}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)}
        )

    logger.info(f"Webhook {result.event_type} received (handled={result.handled})")
    return JSONResponse(content={"received": True})
