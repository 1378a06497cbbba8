"""
Webhook endpoints for billing events.

Public endpoints (no user auth). Stripe events are verified by signature,
account events by a shared key.
"""

from fastapi import APIRouter, Depends, Request

from packages.billing.dependencies import get_entitlement_store, get_webhook_reconciler
from packages.billing.models.schemas.webhooks import (
    AccountCreatedResponse,
    AccountCreatedWebhook,
    WebhookAck,
)
from packages.billing.providers.payment.factory import get_payment_provider
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.services.entitlement_store import EntitlementStore
from packages.billing.services.webhook_reconciler import WebhookReconciler
from packages.billing.webhooks.account_webhook import (
    handle_account_created,
    verify_webhook_key,
)
from packages.billing.webhooks.stripe_webhook import handle_stripe_webhook

router = APIRouter()


@router.post("/webhooks/stripe", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    reconciler: WebhookReconciler = Depends(get_webhook_reconciler),
) -> WebhookAck:
    """
    Receive webhook events from Stripe payment platform.

    No authentication required - webhook signature validated internally.
    """
    return await handle_stripe_webhook(request, reconciler)


@router.post(
    "/webhooks/accounts",
    response_model=AccountCreatedResponse,
    dependencies=[Depends(verify_webhook_key)],
)
async def account_created_webhook(
    payload: AccountCreatedWebhook,
    store: EntitlementStore = Depends(get_entitlement_store),
    payment_provider: PaymentProviderInterface = Depends(get_payment_provider),
) -> AccountCreatedResponse:
    """Create the billing customer for a newly signed-up account."""
    return await handle_account_created(payload, store, payment_provider)
