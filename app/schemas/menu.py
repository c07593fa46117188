from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.models.menu import MenuCategory
from app.services.menu_service import normalize_category


class RecipeLine(BaseModel):
    inventory_id: int
    quantity: int = Field(..., ge=0, description="Lines with 0 are not stored.")

class MenuItemRequest(BaseModel):
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    category: MenuCategory
    description: Optional[str] = None
    is_active: bool = True
    ingredients: List[RecipeLine] = Field(default_factory=list)

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v):
        # Case-insensitive on input, stored lowercase
        return normalize_category(v)

class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[MenuCategory] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    ingredients: Optional[List[RecipeLine]] = Field(None, description="Non-empty list replaces the recipe.")

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v):
        if v is None:
            return v
        return normalize_category(v)

class ActiveMenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    category: MenuCategory

class RecipeLineResponse(BaseModel):
    id: int
    name: str
    quantity_used: int

class MenuItemResponse(ActiveMenuItemResponse):
    description: Optional[str] = None
    is_active: bool
    ingredients: List[RecipeLineResponse]
