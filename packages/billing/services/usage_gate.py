"""
Usage gate in front of every metered operation.

A request moves through authenticate, rate check, entitlement check, quota
check and charge, in that order, and is rejected at the first stage that
fails. Downstream providers are only called with an ``Admission`` in hand.

Charging is pessimistic: usage is incremented by the precomputed cost before
the provider is invoked and is not refunded if the provider fails.
"""

from typing import Optional, Tuple

from common.core.config import settings
from common.core.exceptions import (
    AuthError,
    NoEntitlementError,
    QuotaExceededError,
    RateLimitError,
)
from common.core.otel_axiom_exporter import get_logger, log_span_event, trace_span
from common.providers.rate_limiter.interface import RateLimiterInterface
from packages.accounts.models.domain.account import Account
from packages.auth.models.domain.verified_identity import VerifiedIdentity
from packages.auth.providers.interface import IdentityVerifierInterface
from packages.billing.models.domain.subscription import Subscription, UsageIncrement
from packages.billing.models.domain.usage import Admission, RequestCost, UsageEvent
from packages.billing.policies import GatePolicy
from packages.billing.services.entitlement_store import EntitlementStore

logger = get_logger(__name__)


def validate_token_cap(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Monthly token cap must be a positive integer, got {value!r}")
    return value


class UsageGate:
    def __init__(
        self,
        identity_verifier: IdentityVerifierInterface,
        rate_limiter: RateLimiterInterface,
        store: EntitlementStore,
        monthly_token_cap: Optional[int] = None,
    ):
        self.identity_verifier = identity_verifier
        self.rate_limiter = rate_limiter
        self.store = store
        self.monthly_token_cap = validate_token_cap(
            settings.max_tokens_month_basic
            if monthly_token_cap is None
            else monthly_token_cap
        )

    @trace_span
    async def admit(
        self,
        credential: Optional[str],
        policy: GatePolicy,
        cost: Optional[RequestCost] = None,
    ) -> Admission:
        """Run every gate stage for one request.

        Raises:
            AuthError: credential missing or rejected
            RateLimitError: window for this operation is full
            NoEntitlementError: no active subscription
            QuotaExceededError: the cost does not fit in the remaining allowance
            StoreError: entitlement store unavailable
        """
        if policy.metered and cost is None:
            raise ValueError(f"{policy.operation.value} is metered and needs a cost")

        identity = await self._authenticate(credential)
        await self._check_rate(identity, policy)

        subscription = None
        if policy.requires_entitlement or policy.metered:
            account, subscription = await self._check_entitlement(identity)
        else:
            account = await self.store.get_account(identity.account_id)

        usage = None
        if policy.metered:
            self._check_quota(subscription, cost)
            usage = await self._charge(identity, subscription, policy, cost)

        return Admission(
            operation=policy.operation.value,
            identity=identity,
            account=account,
            subscription=subscription,
            cost=cost,
            usage=usage,
        )

    async def _authenticate(self, credential: Optional[str]) -> VerifiedIdentity:
        if not credential:
            raise AuthError("Authorization header missing or invalid")
        return await self.identity_verifier.verify(credential)

    async def _check_rate(self, identity: VerifiedIdentity, policy: GatePolicy) -> None:
        if policy.rate_limit is None:
            return
        result = await self.rate_limiter.allow(identity.account_id, policy.rate_limit)
        if not result.permitted:
            logger.info(
                f"Rate limited {policy.operation.value} for {identity.account_id}",
                extra={
                    "account_id": identity.account_id,
                    "operation": policy.operation.value,
                    "backend_available": result.backend_available,
                },
            )
            raise RateLimitError(
                "Too many requests",
                context={"retry_after_seconds": policy.rate_limit.window_seconds},
            )

    async def _check_entitlement(
        self, identity: VerifiedIdentity
    ) -> Tuple[Account, Subscription]:
        account = await self.store.get_account(identity.account_id)
        if account is None or not account.customer_id:
            raise NoEntitlementError("No active subscription")

        subscription = await self.store.get_active_subscription(account.customer_id)
        if subscription is None:
            raise NoEntitlementError("No active subscription")
        return account, subscription

    def _check_quota(self, subscription: Subscription, cost: RequestCost) -> None:
        if subscription.usage_tokens + cost.total > self.monthly_token_cap:
            logger.warning(
                f"Monthly token quota reached for subscription {subscription.subscription_id}",
                extra={
                    "subscription_id": subscription.subscription_id,
                    "usage_tokens": subscription.usage_tokens,
                    "requested": cost.total,
                    "cap": self.monthly_token_cap,
                },
            )
            raise QuotaExceededError(
                current_usage=subscription.usage_tokens,
                requested=cost.total,
                cap=self.monthly_token_cap,
            )

    async def _charge(
        self,
        identity: VerifiedIdentity,
        subscription: Subscription,
        policy: GatePolicy,
        cost: RequestCost,
    ) -> UsageIncrement:
        # The cap guard re-checks the quota atomically against concurrent charges
        usage = await self.store.increment_usage(
            subscription.subscription_id, cost.total, cap=self.monthly_token_cap
        )
        if usage is None:
            latest = await self.store.get_subscription(subscription.subscription_id)
            current = latest.usage_tokens if latest else subscription.usage_tokens
            raise QuotaExceededError(
                current_usage=current,
                requested=cost.total,
                cap=self.monthly_token_cap,
            )

        event = UsageEvent(
            account_id=identity.account_id,
            subscription_id=subscription.subscription_id,
            operation=policy.operation.value,
            tokens_used=cost.total,
            tokens_before=usage.before,
            tokens_after=usage.after,
        )
        log_span_event("Usage charged", event.model_dump())
        return usage
