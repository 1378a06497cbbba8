"""
Entitlement store: the single owner of account, subscription and payment
persistence.

The usage gate and the webhook reconciler only go through this service.
Database failures surface as ``StoreError`` so callers map them to a 500
without knowing about SQLAlchemy.
"""

from datetime import datetime
from functools import wraps
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from common.core.exceptions import StoreError
from common.core.otel_axiom_exporter import trace_span, get_logger
from common.db.scoped import transaction
from packages.accounts.models.domain.account import Account
from packages.accounts.repositories.account_repository import AccountRepository
from packages.billing.models.domain.payment import PaymentCreateModel
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionLifecycleUpdate,
    SubscriptionUpsertModel,
    UsageIncrement,
)
from packages.billing.repositories.payment_repository import PaymentRepository
from packages.billing.repositories.subscription_repository import SubscriptionRepository

logger = get_logger(__name__)


def _store_operation(func):
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(
                f"Entitlement store failure in {func.__name__}: {e}",
                extra={"operation": func.__name__},
            )
            raise StoreError("Entitlement store unavailable") from e

    return wrapper


class EntitlementStore:
    def __init__(
        self,
        account_repo: Optional[AccountRepository] = None,
        subscription_repo: Optional[SubscriptionRepository] = None,
        payment_repo: Optional[PaymentRepository] = None,
    ):
        self.account_repo = account_repo or AccountRepository()
        self.subscription_repo = subscription_repo or SubscriptionRepository()
        self.payment_repo = payment_repo or PaymentRepository()

    @trace_span
    @_store_operation
    async def get_account(self, account_id: str) -> Optional[Account]:
        return await self.account_repo.get_by_account_id(account_id)

    @trace_span
    @_store_operation
    async def attach_customer_id(
        self, account_id: str, customer_id: str
    ) -> Optional[Account]:
        return await self.account_repo.attach_customer_id(account_id, customer_id)

    @trace_span
    @_store_operation
    async def get_active_subscription(
        self, customer_id: str, now: Optional[datetime] = None
    ) -> Optional[Subscription]:
        return await self.subscription_repo.get_active_for_customer(customer_id, now)

    @trace_span
    @_store_operation
    async def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        return await self.subscription_repo.get_by_subscription_id(subscription_id)

    @trace_span
    @_store_operation
    async def increment_usage(
        self, subscription_id: str, delta: int, cap: Optional[int] = None
    ) -> Optional[UsageIncrement]:
        if delta < 0:
            raise ValueError("Usage can only grow within a billing period")
        return await self.subscription_repo.increment_usage(subscription_id, delta, cap)

    @trace_span
    @_store_operation
    async def upsert_subscription(
        self, record: SubscriptionUpsertModel, reset_usage: bool
    ) -> Subscription:
        return await self.subscription_repo.upsert(record, reset_usage=reset_usage)

    @trace_span
    @_store_operation
    async def update_subscription_lifecycle(
        self,
        subscription_id: str,
        expires_at: Optional[datetime] = None,
        cancel_at_period_end: Optional[bool] = None,
    ) -> bool:
        return await self.subscription_repo.update_lifecycle(
            subscription_id,
            SubscriptionLifecycleUpdate(
                expires_at=expires_at, cancel_at_period_end=cancel_at_period_end
            ),
        )

    @trace_span
    @_store_operation
    async def append_payment(self, record: PaymentCreateModel) -> bool:
        return await self.payment_repo.append(record)

    @trace_span
    @_store_operation
    async def record_payment_succeeded(
        self, subscription: SubscriptionUpsertModel, payment: PaymentCreateModel
    ) -> Subscription:
        """Start a new billing period and log the payment in one transaction."""
        async with transaction():
            stored = await self.subscription_repo.upsert(subscription, reset_usage=True)
            appended = await self.payment_repo.append(payment)

        if not appended:
            logger.info(
                f"Payment {payment.charge_id} already recorded",
                extra={
                    "charge_id": payment.charge_id,
                    "subscription_id": payment.subscription_id,
                },
            )
        return stored
