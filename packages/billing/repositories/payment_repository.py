"""
Repository for the append-only payment ledger.
"""

from typing import List

from sqlalchemy import select

from common.core.otel_axiom_exporter import trace_span
from common.repositories.base import BaseRepository
from packages.billing.models.database.payment import PaymentEntity
from packages.billing.models.domain.payment import Payment, PaymentCreateModel


class PaymentRepository(BaseRepository[PaymentEntity, Payment]):
    def __init__(self, db_session=None):
        super().__init__(PaymentEntity, Payment, db_session)

    @trace_span
    async def append(self, record: PaymentCreateModel) -> bool:
        """Insert a ledger row. Returns False if the charge was already recorded."""
        async with self._get_session() as session:
            insert = self._insert_for(session)
            statement = (
                insert(PaymentEntity.__table__)
                .values(**record.model_dump())
                .on_conflict_do_nothing(index_elements=[PaymentEntity.charge_id])
            )
            result = await session.execute(statement)
            return result.rowcount > 0

    @trace_span
    async def list_for_subscription(self, subscription_id: str) -> List[Payment]:
        async with self._get_session() as session:
            result = await session.execute(
                select(PaymentEntity)
                .where(PaymentEntity.subscription_id == subscription_id)
                .order_by(PaymentEntity.id)
            )
            return self._entities_to_domain(result.scalars().all())
