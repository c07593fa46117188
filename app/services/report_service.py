import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, List, Tuple

from tortoise import timezone
from tortoise.transactions import in_transaction

from app.core.errors import ServiceValidationError
from app.models.menu import MenuIngredient
from app.models.order import Order, OrderLine
from app.models.report import DailyTotal

log = logging.getLogger("report_service")


@dataclass
class IngredientUsage:
    item_name: str
    total_quantity_used: int


@dataclass
class HourlySales:
    sales_hour: datetime
    total_sales: Decimal


@dataclass
class DaySummary:
    date: date
    total_orders: int
    total_sales: Decimal


def _aware(value: datetime) -> datetime:
    return timezone.make_aware(value) if timezone.is_naive(value) else value


def _day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = _aware(datetime.combine(day, time.min))
    return start, start + timedelta(days=1)


def _check_range(start: datetime, end: datetime) -> Tuple[datetime, datetime]:
    start, end = _aware(start), _aware(end)
    if start > end:
        raise ServiceValidationError("Start date must not be after end date.")
    return start, end


async def orders_in_range(start: datetime, end: datetime) -> List[Order]:
    start, end = _check_range(start, end)
    return await Order.filter(placed_at__gte=start, placed_at__lte=end).order_by("id")


async def inventory_usage(start: datetime, end: datetime) -> List[IngredientUsage]:
    """Ingredient consumption implied by the orders placed in [start, end], largest first."""
    start, end = _check_range(start, end)
    lines = await OrderLine.filter(order__placed_at__gte=start, order__placed_at__lte=end)
    if not lines:
        return []

    ordered: Dict[int, int] = defaultdict(int)
    for line in lines:
        ordered[line.menu_item_id] += line.quantity_ordered

    usage: Dict[str, int] = defaultdict(int)
    recipe_rows = await MenuIngredient.filter(menu_item_id__in=list(ordered)).select_related("inventory_item")
    for row in recipe_rows:
        usage[row.inventory_item.name] += row.quantity_needed * ordered[row.menu_item_id]

    return [
        IngredientUsage(item_name=name, total_quantity_used=qty)
        for name, qty in sorted(usage.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


async def x_report(day: date) -> List[HourlySales]:
    """Sales per hour for one day (the mid-day X report)."""
    start, end = _day_bounds(day)
    orders = await Order.filter(placed_at__gte=start, placed_at__lt=end)

    hours: Dict[datetime, Decimal] = defaultdict(Decimal)
    for order in orders:
        hour = order.placed_at.replace(minute=0, second=0, microsecond=0)
        hours[hour] += Decimal(order.total)
    return [HourlySales(sales_hour=h, total_sales=hours[h]) for h in sorted(hours)]


async def z_report(day: date) -> List[DaySummary]:
    """
    Closing report: returns the running totals for `day` and then clears the
    aggregate table, so the next business day starts from zero.
    """
    async with in_transaction() as conn:
        rows = await DailyTotal.filter(date=day).using_db(conn)
        summary = [
            DaySummary(date=r.date, total_orders=r.total_orders, total_sales=Decimal(r.total_sales))
            for r in rows
        ]
        await DailyTotal.all().using_db(conn).delete()

    log.info(f"Z report read for {day}; daily totals cleared.")
    return summary
