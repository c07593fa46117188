from dataclasses import dataclass, field
from typing import Dict, List

from app.models.menu import MenuIngredient
from app.models.order import Order, OrderLine, OrderStatus
from app.services.sufficiency import IngredientNeed, MenuItemBreakdown

ACTIVE_STATUSES = [OrderStatus.BUILDING, OrderStatus.WAITING]

# Position of each status on the kitchen screen and the menu board
_STATUS_RANK = {OrderStatus.COMPLETE: 0, OrderStatus.BUILDING: 1, OrderStatus.WAITING: 2}


@dataclass
class KitchenOrder:
    order_id: int
    status: OrderStatus
    items: List[MenuItemBreakdown] = field(default_factory=list)


@dataclass
class BoardOrder:
    order_id: int
    status: OrderStatus


def _lane_key(order: Order):
    return (_STATUS_RANK[order.status], order.id)


async def get_kitchen_view() -> List[KitchenOrder]:
    """
    Orders in the lane (building first, then waiting by id), each expanded to its
    lines and the ingredients they take. Derived from the stored orders and the
    current recipes.
    """
    orders = sorted(await Order.filter(status__in=ACTIVE_STATUSES), key=_lane_key)
    if not orders:
        return []

    lines = await (
        OrderLine.filter(order_id__in=[o.id for o in orders])
        .select_related("menu_item")
        .order_by("id")
    )
    recipe_rows = await (
        MenuIngredient.filter(menu_item_id__in=list({line.menu_item_id for line in lines}))
        .select_related("inventory_item")
        .order_by("menu_item_id", "inventory_item_id")
    )
    recipes: Dict[int, List[MenuIngredient]] = {}
    for row in recipe_rows:
        recipes.setdefault(row.menu_item_id, []).append(row)

    view = {o.id: KitchenOrder(order_id=o.id, status=o.status) for o in orders}
    for line in lines:
        view[line.order_id].items.append(
            MenuItemBreakdown(
                menu_item_id=line.menu_item_id,
                name=line.menu_item.name,
                quantity_ordered=line.quantity_ordered,
                ingredients=[
                    IngredientNeed(
                        ingredient_name=row.inventory_item.name,
                        total_amount_needed=row.quantity_needed * line.quantity_ordered,
                    )
                    for row in recipes.get(line.menu_item_id, [])
                ],
            )
        )
    return list(view.values())


async def get_board_view() -> List[BoardOrder]:
    """
    Customer-facing board: the lane plus the most recently completed order, which
    is listed first so customers see it flip to complete before it drops off.
    """
    orders = list(await Order.filter(status__in=ACTIVE_STATUSES))
    last_complete = await Order.filter(status=OrderStatus.COMPLETE).order_by("-id").first()
    if last_complete is not None:
        orders.append(last_complete)
    return [BoardOrder(order_id=o.id, status=o.status) for o in sorted(orders, key=_lane_key)]
