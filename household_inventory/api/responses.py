"""
Standard error response documentation shared by the API routers.
"""

from typing import Any

from fastapi import status
from pydantic import BaseModel, Field


class ErrorResponseModel(BaseModel):
    """Base model for error responses."""

    detail: str = Field(..., description="Additional error details")


class Tags:
    """API route tags for documentation grouping."""

    HEALTH = "Health"
    AUTH = "Auth"
    ITEMS = "Items"
    CATEGORIES = "Categories"
    NOTIFICATIONS = "Notifications"
    WEB = "Web"


default_error_responses: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ErrorResponseModel,
        "description": "Bad Request – Invalid input or inventory rule violated",
    },
    status.HTTP_401_UNAUTHORIZED: {
        "model": ErrorResponseModel,
        "description": "Unauthorized – Missing or invalid session",
    },
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorResponseModel,
        "description": "Internal Error – Storage unavailable or unexpected failure",
    },
}

not_found_responses: dict[int | str, dict[str, Any]] = {
    **default_error_responses,
    status.HTTP_404_NOT_FOUND: {
        "model": ErrorResponseModel,
        "description": "Not Found – No such record for this account",
    },
}

conflict_responses: dict[int | str, dict[str, Any]] = {
    **not_found_responses,
    status.HTTP_409_CONFLICT: {
        "model": ErrorResponseModel,
        "description": "Conflict – An item with this name already exists",
    },
}
