"""
Domain models for Stripe webhook payloads.

Only the fields the reconciler reads are modelled. Both the legacy invoice
layout (top-level ``subscription``/``charge``) and the current one
(``parent.subscription_details``, per-item ``current_period_end``) are
accepted.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Any, List
from enum import Enum
from pydantic import BaseModel, Field


class StripeWebhookType(str, Enum):
    """Stripe webhook event types we act on."""

    INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"
    SUBSCRIPTION_SCHEDULE_EXPIRING = "subscription_schedule.expiring"


def from_timestamp(value: int) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


class StripePeriod(BaseModel):
    start: Optional[int] = None
    end: int


class StripeInvoiceLineItem(BaseModel):
    id: Optional[str] = None
    period: StripePeriod


class StripeInvoiceLines(BaseModel):
    data: List[StripeInvoiceLineItem] = Field(default_factory=list)


class StripeSubscriptionDetails(BaseModel):
    subscription: Optional[str] = None


class StripeInvoiceParent(BaseModel):
    subscription_details: Optional[StripeSubscriptionDetails] = None


class StripeInvoiceData(BaseModel):
    """Stripe invoice object."""

    id: str
    customer: str
    subscription: Optional[str] = None
    parent: Optional[StripeInvoiceParent] = None
    charge: Optional[str] = None
    total: int
    currency: str
    account_country: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    lines: StripeInvoiceLines = Field(default_factory=StripeInvoiceLines)

    @property
    def subscription_id(self) -> Optional[str]:
        if self.subscription:
            return self.subscription
        if self.parent and self.parent.subscription_details:
            return self.parent.subscription_details.subscription
        return None

    @property
    def period_end(self) -> Optional[datetime]:
        """Latest period end across line items."""
        if not self.lines.data:
            return None
        return from_timestamp(max(item.period.end for item in self.lines.data))

    @property
    def amount(self) -> Decimal:
        """Total in major currency units (Stripe sends minor units)."""
        return (Decimal(self.total) / 100).quantize(Decimal("0.01"))

    @property
    def ledger_key(self) -> str:
        """Charge id, or the invoice id for invoices settled without a charge."""
        return self.charge or self.id


class StripeSubscriptionItem(BaseModel):
    current_period_end: Optional[int] = None


class StripeSubscriptionItems(BaseModel):
    data: List[StripeSubscriptionItem] = Field(default_factory=list)


class StripeSubscriptionData(BaseModel):
    """Stripe subscription object."""

    id: str
    customer: str
    cancel_at: Optional[int] = None
    cancel_at_period_end: bool = False
    canceled_at: Optional[int] = None
    ended_at: Optional[int] = None
    current_period_end: Optional[int] = None
    items: StripeSubscriptionItems = Field(default_factory=StripeSubscriptionItems)

    @property
    def effective_period_end(self) -> Optional[int]:
        if self.current_period_end is not None:
            return self.current_period_end
        ends = [
            item.current_period_end
            for item in self.items.data
            if item.current_period_end is not None
        ]
        return max(ends) if ends else None


class StripeEventData(BaseModel):
    """Stripe event data wrapper."""

    object: dict[str, Any]


class StripeWebhookPayload(BaseModel):
    """Complete Stripe webhook payload."""

    id: str
    type: str
    data: StripeEventData
    created: int
    livemode: bool = False

    @property
    def event_type(self) -> Optional[StripeWebhookType]:
        """Known event type, or None for events we do not act on."""
        try:
            return StripeWebhookType(self.type)
        except ValueError:
            return None
