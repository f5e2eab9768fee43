"""Business logic for categories."""

from typing import List, Optional

from loguru import logger
from sqlalchemy import delete, func, select, update

from household_inventory.core.metrics import record_inventory_event
from household_inventory.db.models.category import Category
from household_inventory.db.models.item import Item
from household_inventory.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from household_inventory.services.base import BaseService


class CategoryService(BaseService):
    """Service for category-related operations, scoped to one account per call."""

    async def list_categories(self, account_id: int) -> List[CategoryResponse]:
        """Get all categories of an account ordered by name."""
        query = (
            select(Category)
            .where(Category.account_id == account_id)
            .order_by(Category.name, Category.id)
            .execution_options(populate_existing=True)
        )
        async with self.store_operation("list categories"):
            result = await self.db.execute(query)
            categories = result.scalars().all()

        return [CategoryResponse.model_validate(category) for category in categories]

    async def get_category(self, account_id: int, category_id: int) -> Optional[CategoryResponse]:
        """Get a specific category by ID."""
        query = (
            select(Category)
            .where(Category.account_id == account_id, Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        async with self.store_operation("get category"):
            result = await self.db.execute(query)
            category = result.scalar_one_or_none()

        if not category:
            return None
        return CategoryResponse.model_validate(category)

    async def create_category(self, account_id: int, category_data: CategoryCreate) -> CategoryResponse:
        """Create a new category."""
        category = Category(account_id=account_id, name=category_data.name, color=category_data.color)

        async with self.store_operation("create category"):
            self.db.add(category)
            await self.db.commit()
            await self.db.refresh(category)

        logger.bind(account_id=account_id, category_id=category.id).info(f"Created new category with ID {category.id}")
        record_inventory_event("category_created")
        return CategoryResponse.model_validate(category)

    async def update_category(
        self, account_id: int, category_id: int, category_data: CategoryUpdate
    ) -> Optional[CategoryResponse]:
        """Update name and/or color; omitted or null fields keep their values."""
        changes = {key: value for key, value in category_data.model_dump(exclude_unset=True).items() if value is not None}
        if not changes:
            return await self.get_category(account_id, category_id)

        stmt = (
            update(Category)
            .where(Category.account_id == account_id, Category.id == category_id)
            .values(**changes, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with self.store_operation("update category"):
            result = await self.db.execute(stmt)
            await self.db.commit()

        if result.rowcount == 0:  # type: ignore[attr-defined]
            return None

        logger.bind(account_id=account_id, category_id=category_id).info(f"Updated category with ID {category_id}")
        return await self.get_category(account_id, category_id)

    async def delete_category(self, account_id: int, category_id: int) -> int:
        """
        Delete a category. Its items are kept and become uncategorized.

        Returns the number of categories removed (0 or 1).
        """
        detach = (
            update(Item)
            .where(Item.account_id == account_id, Item.category_id == category_id)
            .values(category_id=None, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        remove = (
            delete(Category)
            .where(Category.account_id == account_id, Category.id == category_id)
            .execution_options(synchronize_session=False)
        )
        async with self.store_operation("delete category"):
            detached = await self.db.execute(detach)
            result = await self.db.execute(remove)
            deleted: int = result.rowcount  # type: ignore[attr-defined]
            if deleted:
                await self.db.commit()
            else:
                await self.db.rollback()

        if deleted:
            logger.bind(account_id=account_id, category_id=category_id).info(
                f"Deleted category with ID {category_id}, "
                f"{detached.rowcount} item(s) moved to uncategorized"  # type: ignore[attr-defined]
            )
            record_inventory_event("category_deleted")
        return deleted
