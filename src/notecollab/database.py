# Engine, session factory and request-scoped sessions
from typing import Any, AsyncIterator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import get_settings
from .core.logging import get_logger
from .core.models.base import BaseModel

logger = get_logger("database")

settings = get_settings()


def engine_options(database_url: str) -> Dict[str, Any]:
    """Pool settings per backend. SQLite (tests, local runs) has no server pool."""
    options: Dict[str, Any] = {"echo": settings.database_echo}
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
        )
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

# Objects stay usable after commit; services return them straight into responses
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One session per request. Uncommitted work is rolled back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create missing tables. Production schemas are managed by alembic."""
    from .core import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
    logger.info("Database schema verified")


async def dispose_engine() -> None:
    await engine.dispose()
