from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from app.models.order import OrderStatus


class OrderLineRequest(BaseModel):
    """Schema for a single cart line in the order request."""
    menu_item_id: int
    quantity: int = Field(..., ge=0, description="Lines adjusted down to 0 are ignored.")

class OrderRequest(BaseModel):
    """Schema for the full order placement request body."""
    lines: List[OrderLineRequest]
    employee_id: Optional[int] = Field(None, description="Omitted for customer self-service orders.")

class OrderPlacementResponse(BaseModel):
    """Response schema for a newly placed order (201 Created)."""
    order_id: int
    status: OrderStatus
    total: Decimal
    message: str

class OrderLineResponse(BaseModel):
    """Schema for a line inside the detailed order response."""
    menu_item_id: int
    name: str
    quantity: int

class OrderDetailResponse(BaseModel):
    """Schema for fetching detailed order information."""
    id: int
    employee_id: Optional[int]
    status: OrderStatus
    total: Decimal
    lines: List[OrderLineResponse]
    placed_at: datetime
