"""PostgreSQL async engine and session management."""

from functools import lru_cache

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from profilehub.core.config import settings


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the engine on first use so memory-store runs never open a pool."""
    return create_async_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False, autoflush=False)


async def check_db_connected(db: AsyncSession) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        await db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


async def dispose_engine() -> None:
    """Close pooled connections; called on application shutdown."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
