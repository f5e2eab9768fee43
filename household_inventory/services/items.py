"""Business logic for items."""

from typing import List, Optional

from loguru import logger
from sqlalchemy import delete, func, select, update
from sqlalchemy.sql import Select

from household_inventory.core.config import settings
from household_inventory.core.exceptions import StoreUnavailable, ValidationFailure
from household_inventory.core.metrics import record_inventory_event
from household_inventory.db.models.category import Category
from household_inventory.db.models.item import Item
from household_inventory.schemas.items import MAX_COUNT, ItemCreate, ItemResponse, ItemUpdate
from household_inventory.services.base import BaseService

# Fields that cannot be cleared; an explicit null for them is ignored.
REQUIRED_FIELDS = ("name", "quantity", "restock_threshold")


class ItemService(BaseService):
    """
    Service for item-related operations.

    Every query is restricted to the given account. Quantity changes are
    single conditional UPDATE statements so concurrent requests cannot
    drive a quantity below zero.
    """

    def _owned_items(self, account_id: int) -> Select:
        # populate_existing: rows changed by UPDATE statements must not be served stale from the identity map
        return (
            select(Item)
            .where(Item.account_id == account_id)
            .execution_options(populate_existing=True)
        )

    async def _ensure_category(self, account_id: int, category_id: Optional[int]) -> None:
        if category_id is None:
            return
        query = select(Category.id).where(Category.id == category_id, Category.account_id == account_id)
        async with self.store_operation("look up category"):
            result = await self.db.execute(query)
            found = result.scalar_one_or_none()
        if found is None:
            raise ValidationFailure(f"Category with ID {category_id} not found")

    async def list_items(self, account_id: int) -> List[ItemResponse]:
        """Get all items of an account ordered by name."""
        query = self._owned_items(account_id).order_by(Item.name, Item.id)
        async with self.store_operation("list items"):
            result = await self.db.execute(query)
            items = result.scalars().all()

        return [ItemResponse.model_validate(item) for item in items]

    async def get_item(self, account_id: int, item_id: int) -> Optional[ItemResponse]:
        """Get a specific item by ID."""
        query = self._owned_items(account_id).where(Item.id == item_id)
        async with self.store_operation("get item"):
            result = await self.db.execute(query)
            item = result.scalar_one_or_none()

        if not item:
            return None

        return ItemResponse.model_validate(item)

    async def create_item(self, account_id: int, item_data: ItemCreate) -> ItemResponse:
        """Create a new item."""
        if item_data.quantity < 0:
            raise ValidationFailure("Quantity cannot be negative")
        await self._ensure_category(account_id, item_data.category_id)

        threshold = item_data.restock_threshold
        if threshold is None:
            threshold = settings.DEFAULT_RESTOCK_THRESHOLD

        item = Item(
            account_id=account_id,
            name=item_data.name,
            quantity=item_data.quantity,
            restock_threshold=threshold,
            category_id=item_data.category_id,
        )

        async with self.store_operation("create item"):
            self.db.add(item)
            await self.db.commit()
        item_id = item.id

        logger.bind(account_id=account_id, item_id=item_id).info(f"Created new item with ID {item_id}")
        record_inventory_event("item_created")

        created = await self.get_item(account_id, item_id)
        if not created:
            raise StoreUnavailable(f"Item with ID {item_id} disappeared after creation")
        return created

    async def update_item(self, account_id: int, item_id: int, item_data: ItemUpdate) -> Optional[ItemResponse]:
        """
        Update an existing item with the fields present in ``item_data``.

        Returns None when the account has no such item.
        """
        changes = item_data.model_dump(exclude_unset=True)
        for key in REQUIRED_FIELDS:
            if key in changes and changes[key] is None:
                changes.pop(key)

        if changes.get("quantity", 0) < 0:
            raise ValidationFailure("Quantity cannot be negative")
        if "category_id" in changes:
            await self._ensure_category(account_id, changes["category_id"])

        if not changes:
            return await self.get_item(account_id, item_id)

        stmt = (
            update(Item)
            .where(Item.account_id == account_id, Item.id == item_id)
            .values(**changes, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with self.store_operation("update item"):
            result = await self.db.execute(stmt)
            await self.db.commit()

        if result.rowcount == 0:  # type: ignore[attr-defined]
            logger.bind(account_id=account_id).warning(f"Item with ID {item_id} not found")
            return None

        logger.bind(account_id=account_id, item_id=item_id).info(
            f"Updated item with ID {item_id}: {', '.join(sorted(changes))}"
        )
        record_inventory_event("item_updated")
        return await self.get_item(account_id, item_id)

    async def use_item(self, account_id: int, item_id: int) -> Optional[ItemResponse]:
        """
        Take one unit out of stock. At zero this changes nothing and still
        returns the item.
        """
        stmt = (
            update(Item)
            .where(Item.account_id == account_id, Item.id == item_id, Item.quantity > 0)
            .values(quantity=Item.quantity - 1, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with self.store_operation("use item"):
            result = await self.db.execute(stmt)
            await self.db.commit()

        if result.rowcount:  # type: ignore[attr-defined]
            logger.bind(account_id=account_id, item_id=item_id).info(f"Used one unit of item {item_id}")
            record_inventory_event("item_used")

        return await self.get_item(account_id, item_id)

    async def purchase_item(self, account_id: int, item_id: int, amount: int) -> Optional[ItemResponse]:
        """
        Add ``amount`` units to stock. Non-positive amounts are ignored; a
        purchase that would take the quantity past ``MAX_COUNT`` is rejected.
        """
        if amount <= 0:
            return await self.get_item(account_id, item_id)
        if amount > MAX_COUNT:
            raise ValidationFailure(f"Quantity cannot exceed {MAX_COUNT}")

        stmt = (
            update(Item)
            .where(Item.account_id == account_id, Item.id == item_id, Item.quantity <= MAX_COUNT - amount)
            .values(quantity=Item.quantity + amount, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with self.store_operation("purchase item"):
            result = await self.db.execute(stmt)
            await self.db.commit()

        if result.rowcount == 0:  # type: ignore[attr-defined]
            if await self.get_item(account_id, item_id):
                raise ValidationFailure(f"Quantity cannot exceed {MAX_COUNT}")
            return None

        logger.bind(account_id=account_id, item_id=item_id).info(f"Purchased {amount} unit(s) of item {item_id}")
        record_inventory_event("item_purchased")
        return await self.get_item(account_id, item_id)

    async def delete_item(self, account_id: int, item_id: int) -> int:
        """Delete an item. Returns the number of rows removed (0 or 1)."""
        stmt = (
            delete(Item)
            .where(Item.account_id == account_id, Item.id == item_id)
            .execution_options(synchronize_session=False)
        )
        async with self.store_operation("delete item"):
            result = await self.db.execute(stmt)
            await self.db.commit()

        deleted: int = result.rowcount  # type: ignore[attr-defined]
        if deleted:
            logger.bind(account_id=account_id, item_id=item_id).info(f"Deleted item with ID {item_id}")
            record_inventory_event("item_deleted")
        return deleted

    async def items_below_threshold(self, account_id: int) -> List[ItemResponse]:
        """Items whose quantity is strictly below their restock threshold, ordered by name."""
        query = (
            self._owned_items(account_id)
            .where(Item.quantity < Item.restock_threshold)
            .order_by(Item.name, Item.id)
        )
        async with self.store_operation("list items to restock"):
            result = await self.db.execute(query)
            items = result.scalars().all()

        return [ItemResponse.model_validate(item) for item in items]
