"""Billing services."""

from packages.billing.services.entitlement_store import EntitlementStore
from packages.billing.services.usage_gate import UsageGate
from packages.billing.services.webhook_reconciler import WebhookReconciler

__all__ = [
    "EntitlementStore",
    "UsageGate",
    "WebhookReconciler",
]
