"""Domain models for billing."""

from packages.billing.models.domain.payment import Payment, PaymentCreateModel
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionLifecycleUpdate,
    SubscriptionUpsertModel,
    UsageIncrement,
)

__all__ = [
    "Payment",
    "PaymentCreateModel",
    "Subscription",
    "SubscriptionLifecycleUpdate",
    "SubscriptionUpsertModel",
    "UsageIncrement",
]
