"""
Repository for subscription records.

Every write here is a single statement so concurrent webhook deliveries and
metered requests never lose each other's updates.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.sql import func

from common.core.otel_axiom_exporter import trace_span, get_logger
from common.repositories.base import BaseRepository
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionLifecycleUpdate,
    SubscriptionUpsertModel,
    UsageIncrement,
)

logger = get_logger(__name__)


class SubscriptionRepository(BaseRepository[SubscriptionEntity, Subscription]):
    """Repository for subscriptions and their usage counters."""

    def __init__(self, db_session=None):
        super().__init__(SubscriptionEntity, Subscription, db_session)

    @trace_span
    async def get_by_subscription_id(
        self, subscription_id: str
    ) -> Optional[Subscription]:
        return await self._get_one_by(
            SubscriptionEntity.subscription_id == subscription_id
        )

    @trace_span
    async def get_active_for_customer(
        self, customer_id: str, now: Optional[datetime] = None
    ) -> Optional[Subscription]:
        """Unexpired subscription for a customer, latest expiry first."""
        now = now or datetime.now(timezone.utc)
        async with self._get_session() as session:
            result = await session.execute(
                select(SubscriptionEntity)
                .where(
                    SubscriptionEntity.customer_id == customer_id,
                    SubscriptionEntity.expires_at > now,
                )
                .order_by(SubscriptionEntity.expires_at.desc())
                .limit(1)
            )
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def increment_usage(
        self, subscription_id: str, delta: int, cap: Optional[int] = None
    ) -> Optional[UsageIncrement]:
        """Add ``delta`` to the usage counter in one UPDATE.

        With ``cap`` the update only applies while the new total stays within
        it. Returns None when no row matched.
        """
        conditions = [SubscriptionEntity.subscription_id == subscription_id]
        if cap is not None:
            conditions.append(SubscriptionEntity.usage_tokens + delta <= cap)

        async with self._get_session() as session:
            result = await session.execute(
                update(SubscriptionEntity.__table__)
                .where(*conditions)
                .values(
                    usage_tokens=SubscriptionEntity.usage_tokens + delta,
                    updated_at=func.now(),
                )
                .returning(SubscriptionEntity.usage_tokens)
            )
            after = result.scalar_one_or_none()

        if after is None:
            return None
        return UsageIncrement(
            subscription_id=subscription_id, before=after - delta, after=after
        )

    @trace_span
    async def upsert(
        self, record: SubscriptionUpsertModel, reset_usage: bool
    ) -> Subscription:
        """Insert or replace a subscription keyed by ``subscription_id``.

        The usage counter is zeroed only when ``reset_usage`` is set.
        ``cancel_at_period_end`` belongs to lifecycle updates and keeps its
        stored value (the column default on insert).
        """
        values = record.model_dump()
        async with self._get_session() as session:
            insert = self._insert_for(session)
            statement = insert(SubscriptionEntity.__table__).values(
                **values, usage_tokens=0
            )
            updates = {
                "customer_id": statement.excluded.customer_id,
                "expires_at": statement.excluded.expires_at,
                "updated_at": func.now(),
            }
            if reset_usage:
                updates["usage_tokens"] = 0
            statement = statement.on_conflict_do_update(
                index_elements=[SubscriptionEntity.subscription_id],
                set_=updates,
            ).returning(*SubscriptionEntity.__table__.c)
            row = (await session.execute(statement)).mappings().one()
            return Subscription.model_validate(dict(row))

    @trace_span
    async def update_lifecycle(
        self, subscription_id: str, changes: SubscriptionLifecycleUpdate
    ) -> bool:
        """Apply a partial lifecycle update. Returns False for unknown ids."""
        values = changes.model_dump(exclude_none=True)
        if not values:
            return False

        async with self._get_session() as session:
            result = await session.execute(
                update(SubscriptionEntity.__table__)
                .where(SubscriptionEntity.subscription_id == subscription_id)
                .values(**values, updated_at=func.now())
            )
            updated = result.rowcount > 0

        if not updated:
            logger.warning(
                f"Lifecycle update for unknown subscription {subscription_id}",
                extra={"subscription_id": subscription_id},
            )
        return updated
