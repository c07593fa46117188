from pydantic import BaseModel
from typing import List, Optional
from app.models.order import OrderStatus


class IngredientResponse(BaseModel):
    ingredient_name: str
    total_amount_needed: int

class KitchenItemResponse(BaseModel):
    menu_item_id: int
    name: str
    quantity_ordered: int
    ingredients: List[IngredientResponse]

class KitchenOrderResponse(BaseModel):
    """One order on the kitchen screen, with what to build."""
    order_id: int
    status: OrderStatus
    items: List[KitchenItemResponse]

class BoardOrderResponse(BaseModel):
    """One order on the customer-facing menu board."""
    order_id: int
    status: OrderStatus

class LaneAdvanceResponse(BaseModel):
    message: str
    completed_order_id: Optional[int] = None
    promoted_order_id: Optional[int] = None
