import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from tortoise.exceptions import OperationalError

from app.models.order import Order, OrderStatus
from app.services.lane_service import advance_lane
from app.services.order_service import place_order
from conftest import AsyncContextManagerMock, FakeQuery, postgres_conn


async def place(catalog, n=1):
    ids = []
    for _ in range(n):
        result = await place_order([{"menu_item_id": catalog.water.id, "quantity": 1}])
        ids.append(result.order_id)
    return ids


async def statuses():
    return {o.id: o.status for o in await Order.all()}


@pytest.mark.asyncio
async def test_advance_completes_building_and_promotes_waiting(catalog):
    first, second = await place(catalog, 2)

    result = await advance_lane()

    assert result.advanced is True
    assert result.completed_order_id == first
    assert result.promoted_order_id == second
    assert await statuses() == {first: OrderStatus.COMPLETE, second: OrderStatus.BUILDING}


@pytest.mark.asyncio
async def test_advance_with_nothing_waiting_empties_the_lane(catalog):
    (only,) = await place(catalog, 1)

    result = await advance_lane()

    assert result.completed_order_id == only
    assert result.promoted_order_id is None
    assert await Order.filter(status=OrderStatus.BUILDING).count() == 0

    # the next order goes straight into the empty lane
    (next_order,) = await place(catalog, 1)
    assert (await Order.get(id=next_order)).status == OrderStatus.BUILDING


@pytest.mark.asyncio
async def test_waiting_orders_are_promoted_fifo(catalog):
    a, b, c, d = await place(catalog, 4)

    promoted = [(await advance_lane()).promoted_order_id for _ in range(3)]

    assert promoted == [b, c, d]
    assert await statuses() == {
        a: OrderStatus.COMPLETE,
        b: OrderStatus.COMPLETE,
        c: OrderStatus.COMPLETE,
        d: OrderStatus.BUILDING,
    }


@pytest.mark.asyncio
async def test_advance_on_empty_lane_is_a_noop(db):
    result = await advance_lane()

    assert result.advanced is False
    assert result.completed_order_id is None
    assert result.promoted_order_id is None


@pytest.mark.asyncio
async def test_at_most_one_building_through_any_sequence(catalog):
    for step in range(6):
        await place(catalog, 2)
        if step % 2:
            await advance_lane()
        assert await Order.filter(status=OrderStatus.BUILDING).count() <= 1
    for _ in range(10):
        await advance_lane()
        assert await Order.filter(status=OrderStatus.BUILDING).count() <= 1


@pytest.mark.asyncio
async def test_locked_building_order_makes_advance_a_noop(fake_transaction):
    """A concurrent caller holds the building row: SKIP LOCKED finds nothing but one exists."""
    queries = [FakeQuery(None), FakeQuery(True)]
    with patch("app.services.lane_service.in_transaction", new=MagicMock(side_effect=fake_transaction)):
        with patch.object(Order, "filter", MagicMock(side_effect=queries)):
            result = await advance_lane()

    assert result.advanced is False


@pytest.mark.asyncio
async def test_locked_waiting_order_is_never_skipped(fake_transaction):
    """The earliest waiting order is held elsewhere: no later order is promoted and nothing is saved."""
    building = MagicMock(id=1, status=OrderStatus.BUILDING)
    building.save = AsyncMock()
    queries = [FakeQuery(building), FakeQuery([2]), FakeQuery(None)]
    with patch("app.services.lane_service.in_transaction", new=MagicMock(side_effect=fake_transaction)):
        with patch.object(Order, "filter", MagicMock(side_effect=queries)):
            result = await advance_lane()

    assert result.advanced is False
    building.save.assert_not_called()
    assert building.status == OrderStatus.BUILDING


@pytest.mark.asyncio
async def test_placements_and_advances_interleaved_never_strand_a_waiting_order(catalog):
    await place(catalog, 2)

    await asyncio.gather(
        place(catalog, 1),
        advance_lane(),
        place(catalog, 2),
        advance_lane(),
        advance_lane(),
        place(catalog, 1),
    )

    building = await Order.filter(status=OrderStatus.BUILDING).count()
    waiting = await Order.filter(status=OrderStatus.WAITING).count()
    assert building <= 1
    if waiting:
        assert building == 1


@pytest.mark.asyncio
async def test_advance_waits_for_open_placements_on_postgres():
    """The lane lock is taken before the lane is read."""
    conn = postgres_conn()
    building = MagicMock(id=1, status=OrderStatus.BUILDING)
    building.save = AsyncMock()
    promoted = MagicMock(id=2, status=OrderStatus.WAITING)
    promoted.save = AsyncMock()
    queries = iter([FakeQuery(building), FakeQuery([2]), FakeQuery(promoted)])

    def filter_after_lock(*args, **kwargs):
        conn.execute_query.assert_awaited_once_with("LOCK TABLE orders IN ROW EXCLUSIVE MODE")
        return next(queries)

    with patch("app.services.lane_service.in_transaction", new=MagicMock(return_value=AsyncContextManagerMock(conn))):
        with patch.object(Order, "filter", MagicMock(side_effect=filter_after_lock)):
            result = await advance_lane()

    assert result.advanced is True
    assert result.completed_order_id == 1
    assert result.promoted_order_id == 2
    assert building.status == OrderStatus.COMPLETE
    assert promoted.status == OrderStatus.BUILDING


@pytest.mark.asyncio
async def test_failed_lane_lock_makes_advance_a_noop():
    conn = postgres_conn(side_effect=OperationalError("lock timeout"))
    with patch("app.services.lane_service.in_transaction", new=MagicMock(return_value=AsyncContextManagerMock(conn))):
        with patch.object(Order, "filter", MagicMock()) as mock_filter:
            result = await advance_lane()

    assert result.advanced is False
    mock_filter.assert_not_called()
