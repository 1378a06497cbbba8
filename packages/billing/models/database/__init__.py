"""Database models for billing."""

from packages.billing.models.database.payment import PaymentEntity
from packages.billing.models.database.subscription import SubscriptionEntity

__all__ = [
    "PaymentEntity",
    "SubscriptionEntity",
]
