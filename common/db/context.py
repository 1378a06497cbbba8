"""
Ambient session tracking for explicit transactions.

``transaction()`` in ``common.db.scoped`` publishes its session here so that
repository calls made inside the block share one connection and commit
together.
"""

from contextvars import ContextVar, Token
from functools import wraps
from typing import Optional, Callable, TypeVar, ParamSpec

from sqlalchemy.ext.asyncio import AsyncSession

_current_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_session", default=None
)


def get_current_session() -> Optional[AsyncSession]:
    """Session of the enclosing transaction, or None outside of one."""
    return _current_session.get()


def set_current_session(session: AsyncSession) -> Token:
    return _current_session.set(session)


def reset_current_session(token: Token) -> None:
    _current_session.reset(token)


def in_transaction() -> bool:
    return get_current_session() is not None


P = ParamSpec("P")
T = TypeVar("T")


def transactional(func: Callable[P, T]) -> Callable[P, T]:
    """
    Run the decorated coroutine inside one transaction.

    Every repository call in the coroutine shares a session. The transaction
    commits on success and rolls back on exception.
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        from common.db.scoped import transaction as tx  # noqa: PLC0415

        async with tx():
            return await func(*args, **kwargs)

    return wrapper
