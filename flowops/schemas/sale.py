"""
Sale recording schemas.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SaleCreate(BaseModel):
    menu_item_id: UUID
    quantity_sold: int = Field(gt=0)


class SaleResponse(BaseModel):
    id: UUID
    menu_item_id: Optional[UUID] = None
    menu_item_name: Optional[str] = None
    quantity_sold: int
    establishment: str
    date: datetime

    model_config = ConfigDict(from_attributes=True)


class DeductionResponse(BaseModel):
    """Stock taken from one inventory row by a sale."""
    ingredient_id: UUID
    inventory_item_id: UUID
    item_name: str
    amount: float
    remaining: float


class SkippedIngredientResponse(BaseModel):
    """Linked ingredient whose inventory row was missing or not deductible."""
    ingredient_id: UUID
    ingredient_name: str
    inventory_item_id: UUID
    reason: str


class SaleRecordResponse(BaseModel):
    sale: SaleResponse
    deductions: List[DeductionResponse] = []
    skipped_ingredients: List[SkippedIngredientResponse] = []
