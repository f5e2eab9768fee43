"""Restock notifications."""

from typing import List, Protocol, Sequence

from loguru import logger

from household_inventory.core.metrics import NOTIFICATION_FAILURES
from household_inventory.schemas.inventory import Notification
from household_inventory.schemas.items import ItemResponse

MESSAGE_TEMPLATE = "Item '{name}' needs restocking. Current: {quantity}, Threshold: {threshold}."


class RestockSource(Protocol):
    async def items_below_threshold(self, account_id: int) -> Sequence[ItemResponse]: ...


def build_notification(item: ItemResponse) -> Notification:
    return Notification(
        item_name=item.name,
        message=MESSAGE_TEMPLATE.format(name=item.name, quantity=item.quantity, threshold=item.restock_threshold),
    )


class RestockNotifier:
    """
    Turns low-stock items into notifications.

    Notifications must never break a page: if the lookup fails the error is
    logged and an empty list is returned.
    """

    def __init__(self, items: RestockSource):
        self.items = items

    async def notifications_for(self, account_id: int) -> List[Notification]:
        try:
            low_stock = await self.items.items_below_threshold(account_id)
        except Exception as exc:
            NOTIFICATION_FAILURES.inc()
            logger.bind(account_id=account_id).error(f"Failed to get items to restock: {exc!r}")
            return []

        return [build_notification(item) for item in low_stock]
