"""
JSON endpoints for categories.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from household_inventory.api.dependencies import get_category_service, get_current_account_id
from household_inventory.api.responses import default_error_responses, not_found_responses
from household_inventory.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from household_inventory.schemas.items import MAX_COUNT
from household_inventory.services.categories import CategoryService

router = APIRouter()


def category_not_found(category_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Category with ID {category_id} not found")


@router.get("", response_model=List[CategoryResponse], summary="List categories", responses=default_error_responses)
async def list_categories(
    account_id: int = Depends(get_current_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> List[CategoryResponse]:
    return await categories.list_categories(account_id)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses=default_error_responses,
)
async def create_category(
    category_in: CategoryCreate,
    account_id: int = Depends(get_current_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Invalid colors are stored as the default category color."""
    return await categories.create_category(account_id, category_in)


@router.get(
    "/{category_id}", response_model=CategoryResponse, summary="Get a category", responses=not_found_responses
)
async def get_category(
    category_id: int = Path(..., le=MAX_COUNT, description="Category ID"),
    account_id: int = Depends(get_current_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await categories.get_category(account_id, category_id)
    if not category:
        raise category_not_found(category_id)
    return category


@router.put(
    "/{category_id}", response_model=CategoryResponse, summary="Update a category", responses=not_found_responses
)
async def update_category(
    category_in: CategoryUpdate,
    category_id: int = Path(..., le=MAX_COUNT, description="Category ID"),
    account_id: int = Depends(get_current_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await categories.update_category(account_id, category_id, category_in)
    if not category:
        raise category_not_found(category_id)
    return category


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
    responses=not_found_responses,
)
async def delete_category(
    category_id: int = Path(..., le=MAX_COUNT, description="Category ID"),
    account_id: int = Depends(get_current_account_id),
    categories: CategoryService = Depends(get_category_service),
) -> None:
    """Items in the category are kept and become uncategorized."""
    if await categories.delete_category(account_id, category_id) == 0:
        raise category_not_found(category_id)
