"""Payment webhook verification.

The provider signs each delivery and sends ``t=<timestamp>,v1=<hex digest>``
in the ``stripe-signature`` header. Verification is done by the Stripe SDK
against the raw body; only then is the envelope parsed.
"""

from typing import Any

import stripe
from pydantic import BaseModel, Field, ValidationError

from together.adapter.error import WebhookSignatureError

SIGNATURE_HEADER = "stripe-signature"


class WebhookEventData(BaseModel):
    object: dict[str, Any] = Field(default_factory=dict)


class WebhookEvent(BaseModel):
    """Typed envelope ``{type, data}`` of a provider event."""

    id: str | None = None
    type: str
    data: WebhookEventData


def construct_event(
    payload: bytes,
    header: str | None,
    secret: str | None,
    tolerance: int = 300,
) -> WebhookEvent:
    """Verify the signature, then parse the event envelope.

    Raises:
        WebhookSignatureError: If the secret or header is missing, the
            signature does not verify, or the body is not an event
    """
    if not secret:
        raise WebhookSignatureError("Webhook secret is not configured")
    if not header:
        raise WebhookSignatureError("Missing signature header")

    try:
        stripe.Webhook.construct_event(payload, header, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        raise WebhookSignatureError(f"Signature verification failed: {e}")
    except ValueError as e:
        raise WebhookSignatureError(f"Malformed event payload: {e}")

    try:
        return WebhookEvent.model_validate_json(payload)
    except ValidationError as e:
        raise WebhookSignatureError(f"Malformed event payload: {e}")
