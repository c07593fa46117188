from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict


class OrderSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: Optional[int] = None
    placed_at: datetime
    total: Decimal

class IngredientUsageResponse(BaseModel):
    item_name: str
    total_quantity_used: int

class HourlySalesResponse(BaseModel):
    sales_hour: datetime
    total_sales: Decimal

class DaySummaryResponse(BaseModel):
    date: date
    total_orders: int
    total_sales: Decimal
