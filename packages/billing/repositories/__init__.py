"""Billing repositories."""

from packages.billing.repositories.payment_repository import PaymentRepository
from packages.billing.repositories.subscription_repository import SubscriptionRepository

__all__ = [
    "PaymentRepository",
    "SubscriptionRepository",
]
