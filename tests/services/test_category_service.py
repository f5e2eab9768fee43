"""
Tests for the category service.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from household_inventory.schemas.categories import CategoryCreate, CategoryUpdate
from household_inventory.schemas.items import ItemCreate
from household_inventory.services.categories import CategoryService
from household_inventory.services.items import ItemService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def categories(db_session: AsyncSession) -> CategoryService:
    return CategoryService(db_session)


async def test_create_category_normalizes_color(categories: CategoryService, account_id: int) -> None:
    category = await categories.create_category(account_id, CategoryCreate(name="Pantry", color="#ffaa00"))

    assert category.id is not None
    assert category.color == "#FFAA00"


async def test_create_category_replaces_invalid_color(categories: CategoryService, account_id: int) -> None:
    category = await categories.create_category(account_id, CategoryCreate(name="Pantry", color="orange"))

    assert category.color == "#CCCCCC"


async def test_list_categories_sorted_and_scoped(
    categories: CategoryService, account_id: int, other_account_id: int
) -> None:
    await categories.create_category(account_id, CategoryCreate(name="Pantry", color="#FFFFFF"))
    await categories.create_category(account_id, CategoryCreate(name="Bathroom", color="#0000FF"))
    await categories.create_category(other_account_id, CategoryCreate(name="Garage", color="#000000"))

    names = [category.name for category in await categories.list_categories(account_id)]

    assert names == ["Bathroom", "Pantry"]


async def test_update_category_keeps_omitted_fields(categories: CategoryService, account_id: int) -> None:
    category = await categories.create_category(account_id, CategoryCreate(name="Pantry", color="#FFFFFF"))

    renamed = await categories.update_category(account_id, category.id, CategoryUpdate(name="Larder"))

    assert renamed is not None
    assert renamed.name == "Larder"
    assert renamed.color == "#FFFFFF"

    recolored = await categories.update_category(account_id, category.id, CategoryUpdate(color="#00ff00"))

    assert recolored is not None
    assert recolored.name == "Larder"
    assert recolored.color == "#00FF00"


async def test_update_category_of_other_account_returns_none(
    categories: CategoryService, account_id: int, other_account_id: int
) -> None:
    theirs = await categories.create_category(other_account_id, CategoryCreate(name="Garage", color="#000000"))

    assert await categories.update_category(account_id, theirs.id, CategoryUpdate(name="Mine")) is None
    assert await categories.get_category(account_id, theirs.id) is None


async def test_delete_category_keeps_items_uncategorized(
    db_session: AsyncSession, categories: CategoryService, account_id: int
) -> None:
    items = ItemService(db_session)
    pantry = await categories.create_category(account_id, CategoryCreate(name="Pantry", color="#FFFFFF"))
    rice = await items.create_item(account_id, ItemCreate(name="Rice", quantity=2, category_id=pantry.id))

    assert await categories.delete_category(account_id, pantry.id) == 1

    remaining = await items.get_item(account_id, rice.id)
    assert remaining is not None
    assert remaining.category_id is None
    assert remaining.category is None
    assert await categories.list_categories(account_id) == []


async def test_delete_missing_category_changes_nothing(
    db_session: AsyncSession, categories: CategoryService, account_id: int, other_account_id: int
) -> None:
    items = ItemService(db_session)
    theirs = await categories.create_category(other_account_id, CategoryCreate(name="Garage", color="#000000"))
    tools = await items.create_item(other_account_id, ItemCreate(name="Tools", quantity=1, category_id=theirs.id))

    assert await categories.delete_category(account_id, theirs.id) == 0
    assert await categories.delete_category(account_id, 999) == 0

    untouched = await items.get_item(other_account_id, tools.id)
    assert untouched is not None
    assert untouched.category_id == theirs.id
