"""
Applies verified Stripe events to local subscription state.

Every mutation is an upsert or a conditional update keyed by the provider's
ids, so redelivered events converge to the same rows. Events are applied in
arrival order; Stripe does not guarantee ordering and a late
``customer.subscription.updated`` can move ``expires_at`` back out.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from common.core.otel_axiom_exporter import get_logger, trace_span
from packages.billing.models.domain.payment import PaymentCreateModel
from packages.billing.models.domain.stripe_webhooks import (
    StripeInvoiceData,
    StripeSubscriptionData,
    StripeWebhookPayload,
    StripeWebhookType,
    from_timestamp,
)
from packages.billing.models.domain.subscription import SubscriptionUpsertModel
from packages.billing.services.entitlement_store import EntitlementStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReconcileOutcome:
    event_id: str
    event_type: str
    applied: bool
    detail: str = ""


class WebhookReconciler:
    def __init__(self, store: EntitlementStore):
        self.store = store
        self._handlers: Dict[
            StripeWebhookType,
            Callable[[StripeWebhookPayload], Awaitable[ReconcileOutcome]],
        ] = {
            StripeWebhookType.INVOICE_PAYMENT_SUCCEEDED: self._on_payment_succeeded,
            StripeWebhookType.SUBSCRIPTION_UPDATED: self._on_subscription_updated,
            StripeWebhookType.SUBSCRIPTION_DELETED: self._on_subscription_deleted,
            StripeWebhookType.SUBSCRIPTION_SCHEDULE_EXPIRING: self._on_schedule_expiring,
        }

    @trace_span
    async def apply(self, event: StripeWebhookPayload) -> ReconcileOutcome:
        """Apply one event.

        Store failures propagate as ``StoreError`` so the delivery is retried.
        Malformed objects inside a known event are logged and acknowledged.
        """
        event_type = event.event_type
        handler = self._handlers.get(event_type) if event_type else None
        if handler is None:
            logger.info(
                f"Unhandled Stripe webhook type: {event.type}",
                extra={"event_id": event.id, "event_type": event.type},
            )
            return ReconcileOutcome(event.id, event.type, False, "unhandled")

        try:
            return await handler(event)
        except ValidationError as e:
            logger.error(
                f"Malformed {event.type} payload in event {event.id}",
                extra={"event_id": event.id, "validation_errors": e.errors()},
            )
            return ReconcileOutcome(event.id, event.type, False, "malformed payload")

    def _skipped(self, event: StripeWebhookPayload, detail: str) -> ReconcileOutcome:
        logger.error(
            f"Skipping {event.type} event {event.id}: {detail}",
            extra={"event_id": event.id, "event_type": event.type},
        )
        return ReconcileOutcome(event.id, event.type, False, detail)

    async def _on_payment_succeeded(
        self, event: StripeWebhookPayload
    ) -> ReconcileOutcome:
        invoice = StripeInvoiceData.model_validate(event.data.object)
        subscription_id = invoice.subscription_id
        period_end = invoice.period_end
        if not subscription_id:
            return self._skipped(event, "invoice has no subscription")
        if period_end is None:
            return self._skipped(event, "invoice has no line items")

        subscription = await self.store.record_payment_succeeded(
            SubscriptionUpsertModel(
                subscription_id=subscription_id,
                customer_id=invoice.customer,
                expires_at=period_end,
            ),
            PaymentCreateModel(
                charge_id=invoice.ledger_key,
                invoice_id=invoice.id,
                subscription_id=subscription_id,
                customer_id=invoice.customer,
                amount=invoice.amount,
                currency=invoice.currency,
                country=invoice.account_country,
                customer_email=invoice.customer_email,
                customer_name=invoice.customer_name,
            ),
        )
        logger.info(
            f"Subscription {subscription_id} renewed until {subscription.expires_at.isoformat()}",
            extra={
                "event_id": event.id,
                "subscription_id": subscription_id,
                "customer_id": invoice.customer,
            },
        )
        return ReconcileOutcome(event.id, event.type, True, "period started")

    async def _on_subscription_updated(
        self, event: StripeWebhookPayload
    ) -> ReconcileOutcome:
        data = StripeSubscriptionData.model_validate(event.data.object)
        expires = data.cancel_at if data.cancel_at is not None else data.effective_period_end
        if expires is None:
            return self._skipped(event, "subscription has no period end")

        updated = await self.store.update_subscription_lifecycle(
            data.id,
            expires_at=from_timestamp(expires),
            cancel_at_period_end=data.cancel_at_period_end,
        )
        return ReconcileOutcome(
            event.id, event.type, updated, "" if updated else "unknown subscription"
        )

    async def _on_subscription_deleted(
        self, event: StripeWebhookPayload
    ) -> ReconcileOutcome:
        data = StripeSubscriptionData.model_validate(event.data.object)
        ended = _first_set(data.canceled_at, data.ended_at, event.created)

        updated = await self.store.update_subscription_lifecycle(
            data.id, expires_at=from_timestamp(ended)
        )
        return ReconcileOutcome(
            event.id, event.type, updated, "" if updated else "unknown subscription"
        )

    async def _on_schedule_expiring(
        self, event: StripeWebhookPayload
    ) -> ReconcileOutcome:
        logger.info(
            f"Subscription schedule expiring: {event.data.object.get('id')}",
            extra={"event_id": event.id},
        )
        return ReconcileOutcome(event.id, event.type, False, "logged")


def _first_set(*values: Optional[int]) -> Optional[int]:
    return next((value for value in values if value is not None), None)
