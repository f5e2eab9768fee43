"""
Pydantic schemas for the items resource.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from household_inventory.schemas.categories import CategorySummary

# Quantities and thresholds are stored in 32-bit INTEGER columns
MAX_COUNT = 2**31 - 1
MIN_COUNT = -(2**31)


class ItemBase(BaseModel):
    """
    Base schema for item data.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Item name")
    quantity: int = Field(0, ge=MIN_COUNT, le=MAX_COUNT, description="Units currently in stock")


class ItemCreate(ItemBase):
    """
    Schema for creating a new item.

    Quantity is range-checked by the item service so that the same rule
    applies to every caller.
    """

    restock_threshold: Optional[int] = Field(
        None, ge=MIN_COUNT, le=MAX_COUNT, description="Restock alert level, defaults to 1"
    )
    category_id: Optional[int] = Field(None, le=MAX_COUNT, description="Category ID")


class ItemUpdate(BaseModel):
    """
    Schema for updating an existing item.

    Only fields present in the payload are changed. ``category_id: null``
    removes the item from its category.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Item name")
    quantity: Optional[int] = Field(None, ge=MIN_COUNT, le=MAX_COUNT, description="Units currently in stock")
    restock_threshold: Optional[int] = Field(None, ge=MIN_COUNT, le=MAX_COUNT, description="Restock alert level")
    category_id: Optional[int] = Field(None, le=MAX_COUNT, description="Category ID")


class PurchaseRequest(BaseModel):
    """
    Schema for recording a purchase. Non-positive quantities change nothing.
    """

    quantity: int = Field(..., ge=MIN_COUNT, le=MAX_COUNT, description="Units bought")


class ItemResponse(ItemBase):
    """
    Schema for item response.
    """

    id: int = Field(..., description="Item ID")
    restock_threshold: int = Field(..., description="Restock alert level")
    category_id: Optional[int] = Field(None, description="Category ID")
    category: Optional[CategorySummary] = Field(None, description="Category details")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "name": "Olive oil",
                    "quantity": 2,
                    "restock_threshold": 1,
                    "category_id": 3,
                    "category": {"id": 3, "name": "Pantry", "color": "#F5DEB3"},
                    "created_at": "2024-01-01T00:00:00Z",
                    "updated_at": "2024-01-01T00:00:00Z",
                }
            ]
        },
    }

    @property
    def needs_restock(self) -> bool:
        return self.quantity < self.restock_threshold
