from fastapi import Depends

from common.providers.rate_limiter.factory import get_rate_limiter
from common.providers.rate_limiter.interface import RateLimiterInterface
from packages.auth.providers.factory import get_identity_verifier
from packages.auth.providers.interface import IdentityVerifierInterface
from packages.billing.services.entitlement_store import EntitlementStore
from packages.billing.services.usage_gate import UsageGate
from packages.billing.services.webhook_reconciler import WebhookReconciler


def get_entitlement_store() -> EntitlementStore:
    return EntitlementStore()


def get_usage_gate(
    identity_verifier: IdentityVerifierInterface = Depends(get_identity_verifier),
    rate_limiter: RateLimiterInterface = Depends(get_rate_limiter),
    store: EntitlementStore = Depends(get_entitlement_store),
) -> UsageGate:
    return UsageGate(identity_verifier, rate_limiter, store)


def get_webhook_reconciler(
    store: EntitlementStore = Depends(get_entitlement_store),
) -> WebhookReconciler:
    return WebhookReconciler(store)
