import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from tortoise.exceptions import BaseORMException, OperationalError
from tortoise.transactions import in_transaction

from app.core.errors import (
    ConcurrencyConflict,
    EmptyOrderError,
    InsufficientStockError,
    PersistenceError,
    ServiceValidationError,
)
from app.models.employee import Employee
from app.models.menu import MenuItem
from app.models.order import Order, OrderLine, OrderStatus
from app.models.report import DailyTotal
from app.services.sufficiency import CartLine, MenuItemBreakdown, check_sufficiency

log = logging.getLogger("order_service")


@dataclass
class PlacementResult:
    order_id: int
    status: OrderStatus
    total: Decimal
    breakdown: List[MenuItemBreakdown]


def merge_cart_lines(items: List[Dict]) -> Dict[int, int]:
    """
    Collapses the raw cart into {menu_item_id: quantity}. Lines adjusted down to
    zero are dropped and repeated menu items are summed, so an order ends up with
    one line per distinct menu item.
    """
    quantities: Dict[int, int] = {}
    for it in items:
        mid = int(it["menu_item_id"])
        qty = int(it["quantity"])
        if qty < 0:
            raise ServiceValidationError(f"Quantity for menu item {mid} cannot be negative.")
        if qty == 0:
            continue
        quantities[mid] = quantities.get(mid, 0) + qty
    return quantities


async def lock_lane(conn: Any) -> None:
    """
    Serializes the building-vs-waiting decision between concurrent placements.
    SHARE ROW EXCLUSIVE conflicts with itself and with the lock a lane advance
    takes first. SQLite transactions are already serialized.
    """
    if conn.capabilities.dialect == "postgres":
        await conn.execute_query("LOCK TABLE orders IN SHARE ROW EXCLUSIVE MODE")


async def lock_lane_for_advance(conn: Any) -> None:
    """
    Makes a lane advance wait for any placement still deciding its lane status.
    ROW EXCLUSIVE conflicts with the placement lock but not with another advance,
    so concurrent advances still fall through to SKIP LOCKED.
    """
    if conn.capabilities.dialect != "postgres":
        return
    try:
        await conn.execute_query("LOCK TABLE orders IN ROW EXCLUSIVE MODE")
    except OperationalError as e:
        raise ConcurrencyConflict(f"Could not lock the order lane: {e}") from e


async def place_order(items: List[Dict], employee_id: Optional[int] = None) -> PlacementResult:
    """
    Checks ingredient sufficiency for the cart and, if it passes, records the order
    in the lane: `building` when nothing is being prepared, `waiting` otherwise.
    All-or-nothing: a shortage or any store failure leaves no order behind.
    """
    quantities = merge_cart_lines(items)
    if not quantities:
        raise EmptyOrderError()

    try:
        async with in_transaction() as conn:
            menu_items = await MenuItem.filter(id__in=list(quantities), is_active=True).using_db(conn)
            menu_map = {m.id: m for m in menu_items}

            missing = [mid for mid in quantities if mid not in menu_map]
            if missing:
                raise ServiceValidationError(
                    f"Menu item(s) {', '.join(str(m) for m in missing)} not found or inactive."
                )

            if employee_id is not None:
                if not await Employee.filter(id=employee_id).using_db(conn).exists():
                    raise ServiceValidationError(f"Employee {employee_id} not found.")

            cart = [
                CartLine(menu_item_id=mid, name=menu_map[mid].name, price=menu_map[mid].price, quantity=qty)
                for mid, qty in quantities.items()
            ]

            # 1. Read-only stock check, nothing written yet
            result = await check_sufficiency(cart, conn)
            if not result.sufficient:
                raise InsufficientStockError(result.shortage)

            # 2. Lane decision
            await lock_lane(conn)
            lane_busy = await Order.filter(status=OrderStatus.BUILDING).using_db(conn).exists()
            status = OrderStatus.WAITING if lane_busy else OrderStatus.BUILDING

            # 3. Order header and lines
            total = sum((line.price * line.quantity for line in cart), Decimal("0"))
            order = await Order.create(
                employee_id=employee_id,
                total=total,
                status=status,
                using_db=conn,
            )
            await OrderLine.bulk_create(
                [
                    OrderLine(order=order, menu_item_id=line.menu_item_id, quantity_ordered=line.quantity)
                    for line in cart
                ],
                using_db=conn,
            )

            # 4. Running totals for the closing report, still under the lane lock
            daily, _ = await DailyTotal.get_or_create(date=order.placed_at.date(), using_db=conn)
            daily.total_orders += 1
            daily.total_sales += total
            await daily.save(using_db=conn)
    except InsufficientStockError as e:
        log.info(f"Order rejected: {e}")
        raise
    except ServiceValidationError:
        raise
    except BaseORMException as e:
        log.error(f"Order placement rolled back: {e}")
        raise PersistenceError("Server failed to place order.") from e

    log.info(f"Order {order.id} placed as {status.value} (total {total}).")
    return PlacementResult(order_id=order.id, status=status, total=total, breakdown=result.breakdown)


async def get_order_by_id(order_id: int) -> Optional[Order]:
    """Fetches an order with its lines and their menu items."""
    return await Order.get_or_none(id=order_id).prefetch_related("lines", "lines__menu_item")
