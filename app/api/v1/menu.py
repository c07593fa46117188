import logging
from fastapi import APIRouter, HTTPException, status
from app.core.errors import NotFoundError, ServiceValidationError
from app.schemas.response import SuccessResponse
from app.schemas.menu import ActiveMenuItemResponse, MenuItemRequest, MenuItemResponse, MenuItemUpdate
from app.services.menu_service import add_menu_item, list_active_items, list_all_items, update_menu_item

log = logging.getLogger("uvicorn")

router = APIRouter()


def _menu_item_data(item) -> dict:
    return MenuItemResponse(
        id=item.id,
        name=item.name,
        price=item.price,
        category=item.category,
        description=item.description,
        is_active=item.is_active,
        ingredients=[
            {
                "id": ing.inventory_item.id,
                "name": ing.inventory_item.name,
                "quantity_used": ing.quantity_needed,
            }
            for ing in item.ingredients
        ],
    ).model_dump(mode="json")


@router.get("/active", response_model=SuccessResponse)
async def active_items_endpoint():
    """What the kiosk and register can sell right now."""
    try:
        items = await list_active_items()
        return SuccessResponse(
            data=[ActiveMenuItemResponse.model_validate(i).model_dump(mode="json") for i in items]
        )
    except Exception as e:
        log.error(f"Error fetching active menu items: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch menu.")


@router.get("/", response_model=SuccessResponse)
async def all_items_endpoint():
    """Every menu item with its recipe, for the manager's menu editor."""
    try:
        items = await list_all_items()
        return SuccessResponse(data=[_menu_item_data(i) for i in items])
    except Exception as e:
        log.error(f"Error fetching menu items: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch menu.")


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_menu_item_endpoint(item_data: MenuItemRequest):
    try:
        item = await add_menu_item(
            name=item_data.name,
            price=item_data.price,
            category=item_data.category,
            description=item_data.description,
            is_active=item_data.is_active,
            ingredients=[line.model_dump() for line in item_data.ingredients],
        )
        return SuccessResponse(data={
            "message": "Menu item and ingredients added successfully",
            "menu_item_id": item.id,
        })
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error adding menu item: {e}")
        raise HTTPException(status_code=500, detail="Failed to add menu item and ingredients")


@router.put("/{item_id}", response_model=SuccessResponse)
async def update_menu_item_endpoint(item_id: int, item_data: MenuItemUpdate):
    """Partial update. A non-empty ingredient list replaces the recipe."""
    changes = item_data.model_dump(exclude_unset=True, exclude={"ingredients"})
    ingredients = [line.model_dump() for line in item_data.ingredients or []]
    try:
        item = await update_menu_item(item_id, ingredients=ingredients, **changes)
        return SuccessResponse(data={
            "message": "Successfully updated menu item and ingredients",
            "menu_item_id": item.id,
        })
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update menu item.")
