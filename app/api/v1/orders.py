import logging
from fastapi import APIRouter, HTTPException, status
from app.core.errors import InsufficientStockError, ServiceValidationError
from app.schemas.response import SuccessResponse
from app.services.order_service import place_order, get_order_by_id
from app.schemas.order import OrderRequest, OrderPlacementResponse, OrderDetailResponse

router = APIRouter()
log = logging.getLogger("uvicorn")


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_order_endpoint(request_data: OrderRequest):
    """
    Places a new order after checking that inventory covers every ingredient.
    The order joins the kitchen lane as `building` or `waiting`.
    """
    try:
        items_data = [
            {"menu_item_id": line.menu_item_id, "quantity": line.quantity}
            for line in request_data.lines
        ]
        if not items_data:
            raise HTTPException(status_code=400, detail="Order must contain items.")

        result = await place_order(items=items_data, employee_id=request_data.employee_id)
        data = OrderPlacementResponse(
            order_id=result.order_id,
            status=result.status,
            total=result.total,
            message=f"Order placed successfully, your number is: {result.order_id}",
        ).model_dump(mode="json")
        return SuccessResponse(data=data)
    except InsufficientStockError:
        # Rendered with the shortage details by the registered handler
        raise
    except ServiceValidationError as e:
        log.error(f"Value error placing order: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException as he:
        log.error(f"HTTP error placing order: {he.detail}")
        raise he
    except Exception as e:
        log.error(f"Error placing order: {e}")
        raise HTTPException(status_code=500, detail="Server failed to place order.")


@router.get("/{order_id}", response_model=SuccessResponse)
async def get_order_endpoint(order_id: int):
    """Fetches details for a specific order."""
    try:
        order = await get_order_by_id(order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")

        lines = [
            {
                "menu_item_id": line.menu_item_id,
                "name": line.menu_item.name,
                "quantity": line.quantity_ordered,
            }
            for line in order.lines
        ]
        data = OrderDetailResponse(
            id=order.id,
            employee_id=order.employee_id,
            status=order.status,
            total=order.total,
            lines=lines,
            placed_at=order.placed_at,
        ).model_dump(mode="json")
        return SuccessResponse(data=data)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error fetching order {order_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch order details.")
