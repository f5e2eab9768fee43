"""
JSON endpoints for items.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from household_inventory.api.dependencies import get_category_service, get_current_account_id, get_item_service
from household_inventory.api.responses import conflict_responses, default_error_responses, not_found_responses
from household_inventory.core.tracing import create_span
from household_inventory.schemas.inventory import GroupedInventory
from household_inventory.schemas.items import MAX_COUNT, ItemCreate, ItemResponse, ItemUpdate, PurchaseRequest
from household_inventory.services.categories import CategoryService
from household_inventory.services.grouping import group_by_category
from household_inventory.services.items import ItemService

router = APIRouter()


def item_not_found(item_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Item with ID {item_id} not found")


@router.get("", response_model=List[ItemResponse], summary="List items", responses=default_error_responses)
async def list_items(
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> List[ItemResponse]:
    """All items of the current account, ordered by name."""
    return await items.list_items(account_id)


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an item",
    responses=conflict_responses,
)
async def create_item(
    item_in: ItemCreate,
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> ItemResponse:
    return await items.create_item(account_id, item_in)


@router.get(
    "/restock",
    response_model=List[ItemResponse],
    summary="Items below their restock threshold",
    responses=default_error_responses,
)
async def list_items_to_restock(
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> List[ItemResponse]:
    return await items.items_below_threshold(account_id)


@router.get(
    "/grouped",
    response_model=GroupedInventory,
    summary="Items grouped by category",
    responses=default_error_responses,
)
async def list_items_grouped(
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
    categories: CategoryService = Depends(get_category_service),
) -> GroupedInventory:
    """
    One group per category (including empty ones), sorted by category name,
    plus the items without a category.
    """
    with create_span("inventory.group_by_category", {"account.id": account_id}):
        return group_by_category(await items.list_items(account_id), await categories.list_categories(account_id))


@router.get("/{item_id}", response_model=ItemResponse, summary="Get an item", responses=not_found_responses)
async def get_item(
    item_id: int = Path(..., le=MAX_COUNT, description="Item ID"),
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> ItemResponse:
    item = await items.get_item(account_id, item_id)
    if not item:
        raise item_not_found(item_id)
    return item


@router.put("/{item_id}", response_model=ItemResponse, summary="Update an item", responses=conflict_responses)
async def update_item(
    item_in: ItemUpdate,
    item_id: int = Path(..., le=MAX_COUNT, description="Item ID"),
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> ItemResponse:
    """Change the fields present in the body; omitted fields are left as they are."""
    item = await items.update_item(account_id, item_id, item_in)
    if not item:
        raise item_not_found(item_id)
    return item


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an item",
    responses=not_found_responses,
)
async def delete_item(
    item_id: int = Path(..., le=MAX_COUNT, description="Item ID"),
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> None:
    if await items.delete_item(account_id, item_id) == 0:
        raise item_not_found(item_id)


@router.post("/{item_id}/use", response_model=ItemResponse, summary="Use one unit", responses=not_found_responses)
async def use_item(
    item_id: int = Path(..., le=MAX_COUNT, description="Item ID"),
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> ItemResponse:
    """Decrease the quantity by one; an item already at zero is returned unchanged."""
    item = await items.use_item(account_id, item_id)
    if not item:
        raise item_not_found(item_id)
    return item


@router.post(
    "/{item_id}/purchase",
    response_model=ItemResponse,
    summary="Record a purchase",
    responses=not_found_responses,
)
async def purchase_item(
    purchase: PurchaseRequest,
    item_id: int = Path(..., le=MAX_COUNT, description="Item ID"),
    account_id: int = Depends(get_current_account_id),
    items: ItemService = Depends(get_item_service),
) -> ItemResponse:
    """Increase the quantity; zero or negative amounts leave the item unchanged."""
    item = await items.purchase_item(account_id, item_id, purchase.quantity)
    if not item:
        raise item_not_found(item_id)
    return item
