"""
Employee API — Database Engine Management
==========================================

What:  Declarative base, async engine construction, and table bootstrap.
How:   `create_engine_from_settings()` builds a pooled async engine from
       Settings. The engine is handed to EmployeeGateway, which is the only
       code that opens sessions on it.
Who:   Used by the application factory (main.py) and by the test fixtures.
When:  One engine per application instance, created in `create_app()`.

Connection Pooling:
    pool_size / max_overflow:  from Settings (server databases only)
    pool_pre_ping:             validates connections before use
    pool_recycle=3600:         recycles connections every hour
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from employee_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the async engine (and its connection pool) for the configured store.

    SQLite engines get no pool arguments: aiosqlite picks its own pool class
    and rejects QueuePool sizing for in-memory databases.
    """
    engine_kwargs = {
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    logger.debug("Created engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create every table registered on Base that does not exist yet.

    Used by tests and by startup when DB_CREATE_TABLES is set. Existing
    tables are left untouched.
    """
    # Registers the employees table on Base.metadata
    from employee_api.models import employee  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
