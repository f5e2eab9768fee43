"""Shared plumbing for database-backed services."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from household_inventory.core.exceptions import StoreUnavailable


class BaseService:
    """Base class for services working on one request-scoped session."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    @asynccontextmanager
    async def store_operation(self, action: str) -> AsyncIterator[None]:
        """
        Roll back and re-raise database failures.

        Integrity errors pass through unchanged so they can be reported as
        conflicts; anything else becomes ``StoreUnavailable``.
        """
        try:
            yield
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Integrity error while trying to {action}")
            raise
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(f"Database error while trying to {action}: {exc}")
            raise StoreUnavailable(f"Could not {action}") from exc
