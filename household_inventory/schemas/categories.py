"""
Pydantic schemas for the categories resource.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from household_inventory.core.config import settings

HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def normalize_color(value: Optional[str]) -> str:
    """
    Return ``value`` as ``#RRGGBB``; anything that is not six hex digits
    (with an optional leading ``#``) becomes the default category color.
    """
    match = HEX_COLOR_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        return settings.DEFAULT_CATEGORY_COLOR
    return f"#{match.group(1).upper()}"


class CategoryBase(BaseModel):
    """
    Base schema for category data.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Category name")
    color: str = Field(settings.DEFAULT_CATEGORY_COLOR, description="Background color as #RRGGBB")

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> str:
        return normalize_color(v)


class CategoryCreate(CategoryBase):
    """
    Schema for creating a new category.
    """

    pass


class CategoryUpdate(BaseModel):
    """
    Schema for updating a category. Omitted fields keep their values.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Category name")
    color: Optional[str] = Field(None, description="Background color as #RRGGBB")

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return normalize_color(v)


class CategorySummary(BaseModel):
    """
    Category fields embedded in item responses.
    """

    id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    color: str = Field(..., description="Background color")

    model_config = {"from_attributes": True}


class CategoryResponse(CategorySummary):
    """
    Schema for category response.
    """

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
