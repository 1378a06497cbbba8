from contextlib import asynccontextmanager
from typing import Generic, TypeVar, Optional, List, Type, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy import select

from common.db.scoped import get_session

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Shared plumbing for entity repositories.

    Sessions come either from the constructor (the caller owns the
    lifecycle) or lazily per operation, joining an enclosing
    ``transaction()`` when one is open.
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
        db_session: Optional[AsyncSession] = None,
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class
        self._explicit_session = db_session

    @asynccontextmanager
    async def _get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._explicit_session is not None:
            yield self._explicit_session
        else:
            async with get_session() as session:
                yield session

    @staticmethod
    def _insert_for(session: AsyncSession):
        """Dialect-specific ``insert`` that supports ON CONFLICT clauses."""
        if session.bind.dialect.name == "postgresql":
            return postgresql.insert
        return sqlite.insert

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(self, entities: List[EntityType]) -> List[DomainModelType]:
        return [self._entity_to_domain(entity) for entity in entities]

    async def _get_one_by(self, *conditions) -> Optional[DomainModelType]:
        """Single row matching ``conditions`` (natural keys are unique)."""
        async with self._get_session() as session:
            result = await session.execute(select(self.entity_class).where(*conditions))
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None
