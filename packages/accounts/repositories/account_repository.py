from typing import Optional
from sqlalchemy import update

from common.core.otel_axiom_exporter import trace_span
from common.repositories.base import BaseRepository
from packages.accounts.models.database.account import AccountEntity
from packages.accounts.models.domain.account import Account


class AccountRepository(BaseRepository[AccountEntity, Account]):
    def __init__(self, db_session=None):
        super().__init__(AccountEntity, Account, db_session)

    @trace_span
    async def get_by_account_id(self, account_id: str) -> Optional[Account]:
        return await self._get_one_by(AccountEntity.account_id == account_id)

    @trace_span
    async def attach_customer_id(
        self, account_id: str, customer_id: str
    ) -> Optional[Account]:
        """Set the billing customer on an account that has none yet.

        Returns the updated account, or None when the account is missing or
        already linked to a customer.
        """
        async with self._get_session() as session:
            result = await session.execute(
                update(AccountEntity)
                .where(
                    AccountEntity.account_id == account_id,
                    AccountEntity.customer_id.is_(None),
                )
                .values(customer_id=customer_id)
                .returning(AccountEntity)
            )
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None
