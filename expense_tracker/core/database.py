# expense_tracker/core/database.py
import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import settings

logger = logging.getLogger(__name__)

# Pool tuning for server databases; SQLite keeps the dialect's own pool
SERVER_POOL_OPTIONS: Dict[str, Any] = {
    "pool_size": 5,
    "max_overflow": 5,
    "pool_timeout": 30,
    "pool_pre_ping": True,
    "pool_recycle": 300,
}


def engine_options(database_url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.DEBUG and settings.LOG_LEVEL == "DEBUG"}
    if not database_url.startswith("sqlite"):
        options.update(SERVER_POOL_OPTIONS)
    return options


engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

Base = declarative_base()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; uncommitted work is rolled back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Rolling back database session: {e}")
            await session.rollback()
            raise
