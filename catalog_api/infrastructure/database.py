"""PostgreSQL access for the catalog.

One async engine per process; each API request gets its own session,
committed when the handler returns and rolled back if it raises.
"""

from collections.abc import AsyncGenerator

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from catalog_api.infrastructure.config import settings

logger = structlog.get_logger()

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

# Products outlive the session that loaded them (responses are built after commit)
async_session_factory = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session.

    Yields:
        AsyncSession bound to the shared engine.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.warning(
                "Session rolled back",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        else:
            await session.commit()


async def ping(session: AsyncSession) -> None:
    """Round-trip a trivial statement; raises if the database is unreachable."""
    await session.execute(text("SELECT 1"))


async def create_tables() -> None:
    """Create the catalog tables that do not exist yet."""
    # Register mapped classes on the metadata before create_all
    import catalog_api.catalog.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
