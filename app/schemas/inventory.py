from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class InventoryResponse(BaseModel):
    """Schema for an inventory record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    stock_level: int
    unit_cost: Decimal

class InventoryItemRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the ingredient (e.g., Orange Chicken Batter).")
    stock_level: int = Field(..., ge=0, description="Quantity on hand.")
    unit_cost: Decimal = Field(..., ge=0, description="Purchase price per unit.")

class InventoryItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    stock_level: Optional[int] = Field(None, ge=0)
    unit_cost: Optional[Decimal] = Field(None, ge=0)
