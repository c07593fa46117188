from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from app.core.errors import Shortage
from app.models.menu import MenuIngredient


@dataclass
class CartLine:
    """A resolved line of the order being placed."""
    menu_item_id: int
    name: str
    price: Decimal
    quantity: int


@dataclass
class IngredientNeed:
    ingredient_name: str
    total_amount_needed: int


@dataclass
class MenuItemBreakdown:
    """What the kitchen needs for one cart line; amounts already multiplied by quantity."""
    menu_item_id: int
    name: str
    quantity_ordered: int
    ingredients: List[IngredientNeed] = field(default_factory=list)


@dataclass
class Sufficient:
    breakdown: List[MenuItemBreakdown]
    sufficient: bool = True


@dataclass
class Insufficient:
    shortage: Shortage
    sufficient: bool = False


SufficiencyResult = Union[Sufficient, Insufficient]


@dataclass
class _Demand:
    name: str
    stock_level: int
    total: int = 0
    consumers: List[str] = field(default_factory=list)


async def check_sufficiency(cart: List[CartLine], conn: Optional[Any] = None) -> SufficiencyResult:
    """
    Expands every cart line through its recipe, aggregates the demand per inventory
    item across the whole cart and compares it with the stock on hand.

    Inventory items are checked in the order they are first met while walking the
    cart in order (each recipe in inventory id order). The first one short of stock
    is reported and nothing after it is looked at. Read-only.
    """
    menu_item_ids = [line.menu_item_id for line in cart]
    recipe_rows = await (
        MenuIngredient.filter(menu_item_id__in=menu_item_ids)
        .select_related("inventory_item")
        .order_by("menu_item_id", "inventory_item_id")
        .using_db(conn)
    )

    recipes: Dict[int, List[MenuIngredient]] = {}
    for row in recipe_rows:
        recipes.setdefault(row.menu_item_id, []).append(row)

    # dicts keep insertion order, which is the check order
    demand: Dict[int, _Demand] = {}
    breakdown: List[MenuItemBreakdown] = []

    for line in cart:
        item = MenuItemBreakdown(
            menu_item_id=line.menu_item_id,
            name=line.name,
            quantity_ordered=line.quantity,
        )
        for row in recipes.get(line.menu_item_id, []):
            inv = row.inventory_item
            needed = row.quantity_needed * line.quantity
            entry = demand.setdefault(inv.id, _Demand(name=inv.name, stock_level=inv.stock_level))
            entry.total += needed
            entry.consumers.append(f"{line.name} x{line.quantity}")
            item.ingredients.append(IngredientNeed(ingredient_name=inv.name, total_amount_needed=needed))
        breakdown.append(item)

    for entry in demand.values():
        if entry.stock_level < entry.total:
            return Insufficient(
                shortage=Shortage(
                    ingredient_name=entry.name,
                    available_stock=entry.stock_level,
                    needed_stock=entry.total,
                    consuming_menu_items=entry.consumers,
                )
            )

    return Sufficient(breakdown=breakdown)
