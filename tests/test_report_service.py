import pytest
from datetime import timedelta
from decimal import Decimal
from tortoise import timezone

from app.core.errors import ServiceValidationError
from app.models.report import DailyTotal
from app.services.order_service import place_order
from app.services.report_service import inventory_usage, orders_in_range, x_report, z_report


def item(menu_item, quantity):
    return {"menu_item_id": menu_item.id, "quantity": quantity}


@pytest.mark.asyncio
async def test_inventory_usage_sums_recipes_over_orders(catalog):
    await place_order([item(catalog.orange_chicken, 2)])
    await place_order([item(catalog.egg_roll, 1), item(catalog.fried_rice, 1)])
    now = timezone.now()

    usage = await inventory_usage(now - timedelta(hours=1), now + timedelta(hours=1))

    # chicken 2*2 + 1, rice 2, sauce 2, wrapper 1
    assert [(u.item_name, u.total_quantity_used) for u in usage] == [
        ("Chicken", 5),
        ("Orange Sauce", 2),
        ("Rice", 2),
        ("Wrapper", 1),
    ]


@pytest.mark.asyncio
async def test_orders_in_range(catalog):
    placed = await place_order([item(catalog.water, 1)])
    now = timezone.now()

    inside = await orders_in_range(now - timedelta(hours=1), now + timedelta(hours=1))
    before = await orders_in_range(now - timedelta(days=2), now - timedelta(days=1))

    assert [o.id for o in inside] == [placed.order_id]
    assert before == []


@pytest.mark.asyncio
async def test_reversed_range_is_rejected(db):
    now = timezone.now()
    with pytest.raises(ServiceValidationError):
        await orders_in_range(now, now - timedelta(days=1))


@pytest.mark.asyncio
async def test_x_report_groups_by_hour(catalog):
    await place_order([item(catalog.orange_chicken, 1)])
    await place_order([item(catalog.water, 1)])

    hours = await x_report(timezone.now().date())

    assert sum(h.total_sales for h in hours) == Decimal("9.99")
    assert all(h.sales_hour.minute == 0 and h.sales_hour.second == 0 for h in hours)


@pytest.mark.asyncio
async def test_z_report_reads_then_clears(catalog):
    await place_order([item(catalog.orange_chicken, 1)])
    await place_order([item(catalog.water, 3)])
    today = (await DailyTotal.first()).date

    rows = await z_report(today)

    assert [(r.date, r.total_orders, r.total_sales) for r in rows] == [(today, 2, Decimal("11.99"))]
    assert await DailyTotal.all().count() == 0
    assert await z_report(today) == []
