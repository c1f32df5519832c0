"""
Menu item and recipe Pydantic schemas for API request/response models.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class IngredientCreate(BaseModel):
    """One recipe line; ``quantity`` is consumed per unit sold."""
    name: str = Field(min_length=1, max_length=255)
    quantity: Decimal = Field(gt=0)
    unit: str = Field(min_length=1, max_length=50)
    notes: Optional[str] = None
    inventory_item_id: Optional[UUID] = None


class IngredientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=50)
    notes: Optional[str] = None
    inventory_item_id: Optional[UUID] = None


class IngredientResponse(BaseModel):
    id: UUID
    menu_item_id: UUID
    name: str
    quantity: float
    unit: str
    notes: Optional[str] = None
    inventory_item_id: Optional[UUID] = None

    model_config = ConfigDict(from_attributes=True)


class MenuItemCreate(BaseModel):
    """Request model for creating a menu item, optionally with its recipe."""
    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    establishment: Optional[str] = None
    ingredients: List[IngredientCreate] = []


class MenuItemUpdate(BaseModel):
    """Request model for updating a menu item."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)


class MenuItemResponse(BaseModel):
    """Response model for a single menu item with its recipe."""
    id: UUID
    name: str
    category: str
    establishment: str
    created_at: datetime
    ingredients: List[IngredientResponse] = []

    model_config = ConfigDict(from_attributes=True)
