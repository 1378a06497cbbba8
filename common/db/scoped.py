"""
Operation-scoped database sessions.

Sessions are acquired per operation and released right after, so no
connection is held while a request waits on the rate limiter or streams a
chat completion.

Usage:
    # Single operation - acquires and releases immediately
    async with get_session() as session:
        result = await session.execute(query)

    # Multiple operations committed together
    async with transaction():
        await subscriptions.upsert(record, reset_usage=True)
        await payments.append(payment)
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import get_logger
from common.db.session import AsyncSessionLocal
from common.db.context import (
    get_current_session,
    set_current_session,
    reset_current_session,
)

logger = get_logger(__name__)


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession, None]:
    """
    Explicit transaction boundary.

    All repository calls inside share one session. Commits on success,
    rolls back and re-raises on exception. A nested ``transaction()`` joins
    the outer one, which owns the commit.
    """
    existing = get_current_session()
    if existing is not None:
        yield existing
        return

    start = time.perf_counter()
    async with AsyncSessionLocal() as session:
        logger.debug(
            f"Transaction session acquire: {(time.perf_counter() - start) * 1000:.2f}ms"
        )
        token = set_current_session(session)
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Transaction rollback due to: {e}")
            await session.rollback()
            raise
        finally:
            reset_current_session(token)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a session for a single DB operation.

    Reuses the enclosing ``transaction()`` session when there is one (the
    transaction commits). Otherwise acquires a session, commits and releases
    it when the block exits.
    """
    existing = get_current_session()
    if existing is not None:
        yield existing
        return

    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Operation rollback due to: {e}")
            await session.rollback()
            raise
