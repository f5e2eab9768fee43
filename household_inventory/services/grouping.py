"""Grouping of an account's items by category."""

from typing import Dict, List, Sequence

from household_inventory.schemas.categories import CategorySummary
from household_inventory.schemas.inventory import CategoryGroup, GroupedInventory
from household_inventory.schemas.items import ItemResponse
from household_inventory.utils.colors import text_color_for


def group_by_category(items: Sequence[ItemResponse], categories: Sequence[CategorySummary]) -> GroupedInventory:
    """
    Partition ``items`` into one group per category plus an uncategorized list.

    Every category gets a group, even without items. Items keep the order in
    which they were supplied; items pointing at a category not in
    ``categories`` are treated as uncategorized. Groups are sorted by name.
    """
    groups: Dict[int, CategoryGroup] = {
        category.id: CategoryGroup(
            id=category.id,
            name=category.name,
            color=category.color,
            text_color=text_color_for(category.color),
        )
        for category in categories
    }
    uncategorized: List[ItemResponse] = []

    for item in items:
        group = groups.get(item.category_id) if item.category_id is not None else None
        if group is None:
            uncategorized.append(item)
        else:
            group.items.append(item)

    return GroupedInventory(
        categorized=sorted(groups.values(), key=lambda group: group.name),
        uncategorized=uncategorized,
    )
