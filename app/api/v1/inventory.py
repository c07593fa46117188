import logging
from fastapi import APIRouter, HTTPException, status
from app.core.errors import NotFoundError, ServiceValidationError
from app.schemas.response import SuccessResponse
from app.schemas.inventory import InventoryItemRequest, InventoryItemUpdate, InventoryResponse
from app.services.inventory_service import add_inventory_item, list_inventory, update_inventory_item

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_inventory_endpoint():
    """All inventory items with stock levels and costs."""
    try:
        items = await list_inventory()
        data = [InventoryResponse.model_validate(i).model_dump(mode="json") for i in items]
        return SuccessResponse(data=data)
    except Exception as e:
        log.error(f"Error fetching inventory: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch inventory.")


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_inventory_endpoint(item_data: InventoryItemRequest):
    try:
        item = await add_inventory_item(
            name=item_data.name,
            stock_level=item_data.stock_level,
            unit_cost=item_data.unit_cost,
        )
        return SuccessResponse(data=InventoryResponse.model_validate(item).model_dump(mode="json"))
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error adding inventory item: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server failed to add inventory item.",
        )


@router.put("/{item_id}", response_model=SuccessResponse)
async def update_inventory_endpoint(item_id: int, item_data: InventoryItemUpdate):
    """Partial update of name, stock level and cost."""
    try:
        item = await update_inventory_item(item_id, **item_data.model_dump(exclude_unset=True))
        return SuccessResponse(data=InventoryResponse.model_validate(item).model_dump(mode="json"))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating inventory item {item_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server failed to update inventory item.",
        )
