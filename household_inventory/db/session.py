"""
Database session configuration.
"""

import os
from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from household_inventory.core.config import settings

if "PYTEST_CURRENT_TEST" in os.environ:
    DATABASE_URL = os.getenv("TEST_DATABASE_URL") or str(settings.DATABASE_URI)
else:
    DATABASE_URL = str(settings.DATABASE_URI)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    SQLite ignores foreign keys unless asked per connection; turn them on so
    ON DELETE rules behave as they do on PostgreSQL.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """
    Create an async engine for ``url``; pool sizing only applies to server databases.
    """
    options: Dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"timeout": 30}
    else:
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_MAX_OVERFLOW
    options.update(kwargs)

    new_engine = create_async_engine(url, **options)
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(DATABASE_URL)

async_session_factory = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
    class_=AsyncSession,
)

# Base class for all models
Base = declarative_base()
