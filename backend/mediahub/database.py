"""
Database configuration and session management.
Uses the SQLAlchemy async engine; asyncpg for PostgreSQL.

The engine owns the connection pool. Components that talk to the database
receive the session factory explicitly instead of importing it.
"""
import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from mediahub.config import Settings, settings
from mediahub.models.base import Base

logger = logging.getLogger(__name__)


def create_engine(config: Settings) -> AsyncEngine:
    """Create the pooled async engine described by `config`."""
    return create_async_engine(
        config.database_url,
        echo=False,  # Disable SQLAlchemy query logging
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to `bind`."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = create_engine(settings)

AsyncSessionLocal = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI routes to get database session.
    Usage: db: AsyncSession = Depends(get_db)
    """
    async with AsyncSessionLocal() as session:
        yield session


async def ping(db: AsyncSession) -> None:
    """Round-trip a trivial statement; raises on connectivity loss."""
    await db.execute(text("SELECT 1"))


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Create tables.
    Called on application startup.
    """
    import mediahub.models  # noqa: F401  (registers every table on Base.metadata)
    
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    logger.info("Database tables ensured")
