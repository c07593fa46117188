from typing import List
from dataclasses import dataclass, field


class ServiceValidationError(ValueError):
    """Input rejected before any store access (bad ids, categories, empty carts)."""


class EmptyOrderError(ServiceValidationError):
    def __init__(self, message: str = "Order must contain items."):
        super().__init__(message)


class NotFoundError(ServiceValidationError):
    """Referenced record does not exist."""


@dataclass
class Shortage:
    """First inventory item whose aggregated demand exceeds its stock."""
    ingredient_name: str
    available_stock: int
    needed_stock: int
    consuming_menu_items: List[str] = field(default_factory=list)

    def describe(self) -> str:
        return (
            f"Low Stock Alert: The ingredient {self.ingredient_name} is being ordered in "
            f"{', '.join(self.consuming_menu_items)}, which uses total of {self.needed_stock}, "
            f"and there is {self.available_stock} available."
        )

    def as_dict(self) -> dict:
        return {
            "ingredient_name": self.ingredient_name,
            "available_stock": self.available_stock,
            "needed_stock": self.needed_stock,
            "consuming_menu_items": list(self.consuming_menu_items),
        }


class InsufficientStockError(ValueError):
    """Raised after the read-only sufficiency check fails. Nothing was written."""

    def __init__(self, shortage: Shortage):
        self.shortage = shortage
        super().__init__(shortage.describe())


class ConcurrencyConflict(Exception):
    """Another transaction holds the order rows a lane advance needs."""


class PersistenceError(Exception):
    """The store rejected or failed a write; the transaction was rolled back."""
