import logging
from dataclasses import dataclass
from typing import Optional

from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from app.core.errors import ConcurrencyConflict, PersistenceError
from app.models.order import Order, OrderStatus
from app.services.order_service import lock_lane_for_advance

log = logging.getLogger("lane_service")


@dataclass
class LaneAdvance:
    advanced: bool
    completed_order_id: Optional[int] = None
    promoted_order_id: Optional[int] = None


async def advance_lane() -> LaneAdvance:
    """
    Kitchen "process next order": completes the order being built and promotes the
    earliest waiting order into the lane, both in one transaction.

    Rows are taken with FOR UPDATE SKIP LOCKED. If another caller already holds the
    building order, or the earliest waiting order, this call rolls back and reports
    a no-op instead of blocking or promoting a later order. Open placements are
    waited for first, so an order committed as waiting is never left behind.
    """
    try:
        async with in_transaction() as conn:
            # wait out any placement that is still choosing between building and waiting
            await lock_lane_for_advance(conn)
            building = await (
                Order.filter(status=OrderStatus.BUILDING)
                .order_by("id")
                .select_for_update(skip_locked=True)
                .using_db(conn)
                .first()
            )
            if building is None and await Order.filter(status=OrderStatus.BUILDING).using_db(conn).exists():
                raise ConcurrencyConflict("Building order is held by another transaction.")

            next_ids = await (
                Order.filter(status=OrderStatus.WAITING)
                .order_by("id")
                .limit(1)
                .using_db(conn)
                .values_list("id", flat=True)
            )
            promoted = None
            if next_ids:
                promoted = await (
                    Order.filter(id=next_ids[0], status=OrderStatus.WAITING)
                    .select_for_update(skip_locked=True)
                    .using_db(conn)
                    .first()
                )
                if promoted is None:
                    raise ConcurrencyConflict(f"Waiting order {next_ids[0]} is held by another transaction.")

            if building is not None:
                building.status = OrderStatus.COMPLETE
                await building.save(update_fields=["status"], using_db=conn)
            if promoted is not None:
                promoted.status = OrderStatus.BUILDING
                await promoted.save(update_fields=["status"], using_db=conn)
    except ConcurrencyConflict as e:
        log.info(f"Lane advance skipped: {e}")
        return LaneAdvance(advanced=False)
    except BaseORMException as e:
        log.error(f"Lane advance rolled back: {e}")
        raise PersistenceError("Server failed to update order statuses.") from e

    result = LaneAdvance(
        advanced=building is not None or promoted is not None,
        completed_order_id=building.id if building else None,
        promoted_order_id=promoted.id if promoted else None,
    )
    log.info(f"Lane advanced: completed={result.completed_order_id} building={result.promoted_order_id}")
    return result
