# app/models/__init__.py
from .inventory import InventoryItem
from .menu import MenuItem, MenuIngredient, MenuCategory
from .employee import Employee
from .order import Order, OrderLine, OrderStatus
from .report import DailyTotal

# Export all models
__all__ = [
    "InventoryItem",
    "MenuItem",
    "MenuIngredient",
    "MenuCategory",
    "Employee",
    "Order",
    "OrderLine",
    "OrderStatus",
    "DailyTotal",
]
