from typing import List

from fastapi import APIRouter, Depends

from household_inventory.api.dependencies import get_current_account_id, get_restock_notifier
from household_inventory.api.responses import default_error_responses
from household_inventory.schemas.inventory import Notification
from household_inventory.services.notifier import RestockNotifier

router = APIRouter()


@router.get(
    "",
    response_model=List[Notification],
    summary="Restock notifications for the current account",
    responses=default_error_responses,
)
async def get_notifications(
    account_id: int = Depends(get_current_account_id),
    notifier: RestockNotifier = Depends(get_restock_notifier),
) -> List[Notification]:
    """Always succeeds for an authenticated account; lookup failures yield an empty list."""
    return await notifier.notifications_for(account_id)
