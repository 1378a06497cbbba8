from typing import Optional

from sqlalchemy import delete, func, select

from common.core.otel_axiom_exporter import trace_span
from common.repositories.base import BaseRepository
from packages.banking.models.database.bank_item import BankItemEntity
from packages.banking.models.domain.bank_item import BankItem, BankItemUpsertModel


class BankItemRepository(BaseRepository[BankItemEntity, BankItem]):
    def __init__(self, db_session=None):
        super().__init__(BankItemEntity, BankItem, db_session)

    @trace_span
    async def count_for_customer(self, customer_id: str) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count())
                .select_from(BankItemEntity)
                .where(BankItemEntity.customer_id == customer_id)
            )
            return result.scalar_one()

    @trace_span
    async def get_for_institution(
        self, customer_id: str, institution_id: str
    ) -> Optional[BankItem]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BankItemEntity)
                .where(
                    BankItemEntity.customer_id == customer_id,
                    BankItemEntity.institution_id == institution_id,
                )
                .order_by(BankItemEntity.created_at.desc(), BankItemEntity.id.desc())
                .limit(1)
            )
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def upsert(self, record: BankItemUpsertModel) -> BankItem:
        """Insert or replace the item for a (customer, institution) pair."""
        async with self._get_session() as session:
            insert = self._insert_for(session)
            statement = insert(BankItemEntity.__table__).values(**record.model_dump())
            statement = statement.on_conflict_do_update(
                index_elements=[BankItemEntity.customer_id, BankItemEntity.institution_id],
                set_={
                    "item_id": statement.excluded.item_id,
                    "access_token": statement.excluded.access_token,
                    "institution_name": statement.excluded.institution_name,
                },
            ).returning(*BankItemEntity.__table__.c)
            row = (await session.execute(statement)).mappings().one()
            return BankItem.model_validate(dict(row))

    @trace_span
    async def delete_for_institution(self, customer_id: str, institution_id: str) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                delete(BankItemEntity).where(
                    BankItemEntity.customer_id == customer_id,
                    BankItemEntity.institution_id == institution_id,
                )
            )
            return result.rowcount
