import pytest

from app.models.order import OrderStatus
from app.services.lane_service import advance_lane
from app.services.order_service import place_order
from app.services.views import get_board_view, get_kitchen_view


def item(menu_item, quantity):
    return {"menu_item_id": menu_item.id, "quantity": quantity}


@pytest.mark.asyncio
async def test_kitchen_view_lists_lane_with_ingredients(catalog):
    first = await place_order([item(catalog.orange_chicken, 2), item(catalog.water, 1)])
    second = await place_order([item(catalog.fried_rice, 3)])

    view = await get_kitchen_view()

    assert [(o.order_id, o.status) for o in view] == [
        (first.order_id, OrderStatus.BUILDING),
        (second.order_id, OrderStatus.WAITING),
    ]
    chicken, water = view[0].items
    assert (chicken.name, chicken.quantity_ordered) == ("Orange Chicken", 2)
    assert [(i.ingredient_name, i.total_amount_needed) for i in chicken.ingredients] == [
        ("Chicken", 4),
        ("Orange Sauce", 2),
    ]
    assert water.ingredients == []
    assert [(i.ingredient_name, i.total_amount_needed) for i in view[1].items[0].ingredients] == [("Rice", 6)]


@pytest.mark.asyncio
async def test_kitchen_view_matches_placement_breakdown(catalog):
    placed = await place_order([item(catalog.orange_chicken, 1), item(catalog.egg_roll, 2)])

    (order,) = await get_kitchen_view()

    assert order.items == placed.breakdown


@pytest.mark.asyncio
async def test_kitchen_view_drops_completed_orders(catalog):
    first = await place_order([item(catalog.water, 1)])
    second = await place_order([item(catalog.water, 1)])
    await advance_lane()

    view = await get_kitchen_view()

    assert [(o.order_id, o.status) for o in view] == [(second.order_id, OrderStatus.BUILDING)]
    assert first.order_id not in [o.order_id for o in view]


@pytest.mark.asyncio
async def test_board_view_shows_latest_completed_first(catalog):
    ids = [(await place_order([item(catalog.water, 1)])).order_id for _ in range(4)]
    await advance_lane()
    await advance_lane()

    board = await get_board_view()

    # ids[0] completed earlier and is gone, ids[1] just completed
    assert [(o.order_id, o.status) for o in board] == [
        (ids[1], OrderStatus.COMPLETE),
        (ids[2], OrderStatus.BUILDING),
        (ids[3], OrderStatus.WAITING),
    ]


@pytest.mark.asyncio
async def test_views_are_empty_without_orders(db):
    assert await get_kitchen_view() == []
    assert await get_board_view() == []


@pytest.mark.asyncio
async def test_views_are_idempotent(catalog):
    await place_order([item(catalog.orange_chicken, 1)])
    await place_order([item(catalog.fried_rice, 1)])
    await advance_lane()

    assert await get_kitchen_view() == await get_kitchen_view()
    assert await get_board_view() == await get_board_view()
