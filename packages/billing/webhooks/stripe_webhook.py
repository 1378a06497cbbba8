"""
Stripe webhook handler for subscription lifecycle events.

Only a bad signature or a store failure while applying a recognized event
produce a non-2xx response. Everything else is acknowledged so Stripe stops
redelivering it.
"""

import stripe
from fastapi import Request, HTTPException, status
from pydantic import ValidationError

from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger
from packages.billing.models.domain.stripe_webhooks import StripeWebhookPayload
from packages.billing.models.schemas.webhooks import WebhookAck
from packages.billing.services.webhook_reconciler import WebhookReconciler

logger = get_logger(__name__)


async def handle_stripe_webhook(
    request: Request, reconciler: WebhookReconciler
) -> WebhookAck:
    """
    Handle incoming webhook from Stripe.

    Validates the webhook signature and hands the event to the reconciler.
    """
    payload_bytes = await request.body()
    sig_header = request.headers.get("stripe-signature")

    if not sig_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing stripe-signature header",
        )

    try:
        stripe.Webhook.construct_event(
            payload_bytes, sig_header, settings.stripe_webhook_secret
        )
    except (stripe.SignatureVerificationError, ValueError) as e:
        logger.error(f"Stripe webhook signature verification failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature"
        )

    try:
        payload = StripeWebhookPayload.model_validate_json(payload_bytes)
    except ValidationError as e:
        logger.error(
            "Invalid Stripe webhook payload", extra={"validation_errors": e.errors()}
        )
        return WebhookAck()

    logger.info(
        f"Received Stripe webhook: {payload.type}",
        extra={
            "event_id": payload.id,
            "event_type": payload.type,
            "livemode": payload.livemode,
        },
    )

    outcome = await reconciler.apply(payload)
    logger.info(
        f"Processed Stripe webhook {payload.id}",
        extra={
            "event_id": payload.id,
            "applied": outcome.applied,
            "detail": outcome.detail,
        },
    )
    return WebhookAck()
