"""
Domain errors raised by the inventory services.

Missing records are not errors: repository lookups return ``None`` (or a
row count of 0) and the adapters decide how to report it.
"""


class InventoryError(Exception):
    """Base class for inventory errors."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailure(InventoryError):
    """A request would break an inventory invariant."""


class StoreUnavailable(InventoryError):
    """The database could not complete an operation."""
