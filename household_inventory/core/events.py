"""
Application lifecycle event handlers.

These functions are executed during application startup and shutdown.
"""

from typing import Callable, List

from loguru import logger
from sqlalchemy import text

from household_inventory.db.session import async_session_factory, engine


async def connect_to_db() -> None:
    """
    Verify the database connection so startup fails fast when it is down.
    """
    try:
        logger.info(f"Connecting to {engine.dialect.name} database...")
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
            await session.commit()
        logger.info("Database connection established and verified")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise


async def close_db_connection() -> None:
    """
    Close database connection.
    """
    try:
        logger.info("Closing database connections...")
        await engine.dispose()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


startup_event_handlers: List[Callable] = [
    connect_to_db,
]

shutdown_event_handlers: List[Callable] = [
    close_db_connection,
]
