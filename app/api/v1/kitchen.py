import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Query
from app.schemas.response import SuccessResponse
from app.schemas.kitchen import BoardOrderResponse, KitchenOrderResponse, LaneAdvanceResponse
from app.services.lane_service import advance_lane
from app.services.views import get_board_view, get_kitchen_view

router = APIRouter()
log = logging.getLogger("uvicorn")


@router.put("/next", response_model=SuccessResponse)
async def advance_lane_endpoint():
    """
    Completes the order being built and starts the next waiting one.
    A call that loses a race with another one is a no-op and still succeeds.
    """
    try:
        result = await advance_lane()
    except Exception as e:
        log.error(f"Error advancing kitchen lane: {e}")
        raise HTTPException(status_code=500, detail="Failed to update order statuses")

    message = "Order status updated successfully" if result.advanced else "No order status changed"
    data = LaneAdvanceResponse(
        message=message,
        completed_order_id=result.completed_order_id,
        promoted_order_id=result.promoted_order_id,
    ).model_dump(mode="json")
    return SuccessResponse(data=data)


@router.get("/orders", response_model=SuccessResponse)
async def lane_orders_endpoint(source: str = Query("", description="'kitchen' or 'menu'")):
    """
    Polled by the kitchen screen (`source=kitchen`, with items and ingredients) and
    the customer menu board (`source=menu`, order numbers and statuses only).
    """
    try:
        if source == "kitchen":
            orders = await get_kitchen_view()
            data = [KitchenOrderResponse(**asdict(o)).model_dump(mode="json") for o in orders]
        elif source == "menu":
            orders = await get_board_view()
            data = [BoardOrderResponse(**asdict(o)).model_dump(mode="json") for o in orders]
        else:
            data = []
    except Exception as e:
        log.error(f"Error fetching lane orders for '{source}': {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch orders.")
    return SuccessResponse(data=data)
