"""
FastAPI API dependencies.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from household_inventory.core.config import settings
from household_inventory.core.security import decode_access_token
from household_inventory.db.session import async_session_factory
from household_inventory.services.accounts import AccountService
from household_inventory.services.categories import CategoryService
from household_inventory.services.items import ItemService
from household_inventory.services.notifier import RestockNotifier


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting an async database session.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)


def get_session_account_id(request: Request, token: Optional[str] = Depends(oauth2_scheme)) -> Optional[int]:
    """
    Account id from the bearer token or, failing that, the session cookie.
    """
    raw_token = token or request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not raw_token:
        return None
    return decode_access_token(raw_token)


def get_current_account_id(account_id: Optional[int] = Depends(get_session_account_id)) -> int:
    """Authenticated account id; 401 when the request carries no valid session."""
    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account_id


def get_item_service(db: AsyncSession = Depends(get_db_session)) -> ItemService:
    return ItemService(db)


def get_category_service(db: AsyncSession = Depends(get_db_session)) -> CategoryService:
    return CategoryService(db)


def get_account_service(db: AsyncSession = Depends(get_db_session)) -> AccountService:
    return AccountService(db)


def get_restock_notifier(items: ItemService = Depends(get_item_service)) -> RestockNotifier:
    return RestockNotifier(items)
