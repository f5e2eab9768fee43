"""
Database models.
"""

from household_inventory.db.models.account import Account
from household_inventory.db.models.category import Category
from household_inventory.db.models.item import Item

__all__ = [
    "Account",
    "Category",
    "Item",
]
