"""Business logic for accounts."""

from typing import Optional

from loguru import logger
from sqlalchemy import select

from household_inventory.core.exceptions import ValidationFailure
from household_inventory.core.security import get_password_hash, verify_password
from household_inventory.db.models.account import Account
from household_inventory.schemas.accounts import AccountCreate, AccountResponse
from household_inventory.services.base import BaseService


class AccountService(BaseService):
    """Signup and credential checks. Accounts are never changed after creation."""

    async def _find_by_email(self, email: str) -> Optional[Account]:
        query = select(Account).where(Account.email == email.strip().lower())
        async with self.store_operation("look up account"):
            result = await self.db.execute(query)
            return result.scalar_one_or_none()

    async def get_account(self, account_id: int) -> Optional[AccountResponse]:
        """Get an account by ID."""
        query = select(Account).where(Account.id == account_id)
        async with self.store_operation("get account"):
            result = await self.db.execute(query)
            account = result.scalar_one_or_none()

        if not account:
            return None
        return AccountResponse.model_validate(account)

    async def get_account_by_email(self, email: str) -> Optional[AccountResponse]:
        """Get an account by login email."""
        account = await self._find_by_email(email)
        if not account:
            return None
        return AccountResponse.model_validate(account)

    async def create_account(self, account_data: AccountCreate) -> AccountResponse:
        """Create a new account with a hashed password."""
        if await self._find_by_email(account_data.email):
            raise ValidationFailure("An account with this email already exists")

        account = Account(
            name=account_data.name,
            email=account_data.email,
            hashed_password=get_password_hash(account_data.password),
        )
        async with self.store_operation("create account"):
            self.db.add(account)
            await self.db.commit()
            await self.db.refresh(account)

        logger.bind(account_id=account.id).info(f"Created new account with ID {account.id}")
        return AccountResponse.model_validate(account)

    async def authenticate(self, email: str, password: str) -> Optional[AccountResponse]:
        """Return the account when the credentials match, otherwise None."""
        account = await self._find_by_email(email)
        if not account or not verify_password(password, str(account.hashed_password)):
            return None
        return AccountResponse.model_validate(account)
