"""
Derived views over an account's inventory. None of these are persisted.
"""

from typing import List

from pydantic import BaseModel, Field

from household_inventory.schemas.items import ItemResponse


class CategoryGroup(BaseModel):
    """
    A category together with the items filed under it.
    """

    id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    color: str = Field(..., description="Background color")
    text_color: str = Field(..., description="Readable foreground color for the background")
    items: List[ItemResponse] = Field(default_factory=list, description="Items in this category")


class GroupedInventory(BaseModel):
    """
    Items partitioned by category. ``categorized`` is sorted by category name.
    """

    categorized: List[CategoryGroup] = Field(default_factory=list)
    uncategorized: List[ItemResponse] = Field(default_factory=list)


class Notification(BaseModel):
    """
    A restock reminder for one item.
    """

    item_name: str = Field(..., description="Item name")
    message: str = Field(..., description="Human readable reminder")
