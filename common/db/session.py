from uuid import uuid4

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import pool
from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


def _engine_options() -> dict:
    # Supabase fronts Postgres with a transaction-mode pooler, so asyncpg
    # prepared statement names must be unique per connection checkout
    options = {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "connect_args": {
            "prepared_statement_name_func": lambda: f"__ynter_{uuid4()}__",
            "statement_cache_size": 0,
        },
    }
    if settings.db_use_nullpool:
        logger.info("Database pooling disabled (NullPool)")
        options["poolclass"] = pool.NullPool
    else:
        logger.info(
            "Database pool configured",
            extra={
                "pool_size": settings.db_pool_size,
                "max_overflow": settings.db_pool_overflow,
            },
        )
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_pool_overflow
    return options


engine = create_async_engine(settings.async_database_url, **_engine_options())
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)
