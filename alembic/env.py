import asyncio
import os
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

project_root = Path(__file__).resolve().parents[1]

# .env values never override variables already in the environment
load_dotenv(dotenv_path=project_root / ".env", override=False)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Import every model so autogenerate sees the full schema
from notecollab.core import models  # noqa: E402,F401
from notecollab.core.models.base import BaseModel  # noqa: E402

target_metadata = BaseModel.metadata


def _database_url() -> str:
    """alembic.ini wins, then DATABASE_URL, then the app's settings."""
    url = config.get_main_option("sqlalchemy.url") or os.environ.get("DATABASE_URL")
    if not url:
        from notecollab.config import get_settings

        url = get_settings().database_url
    if not url.startswith("postgresql"):
        raise ValueError(f"Only PostgreSQL is supported for migrations. Got: {url}")
    return url


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with a bound connection (sync)."""
    context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations(url: str) -> None:
    connectable: AsyncEngine = create_async_engine(url, poolclass=pool.NullPool)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    url = _database_url()

    if url.startswith("postgresql+asyncpg"):
        asyncio.run(run_async_migrations(url))
        return

    # sync drivers (psycopg)
    connectable = engine_from_config(
        {"sqlalchemy.url": url}, prefix="sqlalchemy.", poolclass=pool.NullPool
    )
    with connectable.connect() as connection:
        do_run_migrations(connection)


def run_migrations_offline() -> None:
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
