"""
Inventory Pydantic schemas for API request/response models.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from flowops.models.enums import InventoryLogReason, InventoryStatus


class InventoryItemCreate(BaseModel):
    """Request model for creating an inventory item."""
    name: str = Field(min_length=1, max_length=255)
    icon: str = Field(default="📦", min_length=1, max_length=1024)
    category: Optional[str] = Field(default=None, max_length=255)
    quantity: Decimal = Decimal("0")
    unit: Optional[str] = Field(default=None, max_length=50)
    cost_per_unit: Optional[Decimal] = Field(default=None, ge=0)
    status: InventoryStatus = InventoryStatus.OK
    low_comment: Optional[str] = None
    # Honoured for system admins only
    establishment: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class InventoryItemUpdate(BaseModel):
    """Request model for updating an inventory item."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=1024)
    category: Optional[str] = Field(default=None, max_length=255)
    quantity: Optional[Decimal] = None
    unit: Optional[str] = Field(default=None, max_length=50)
    cost_per_unit: Optional[Decimal] = Field(default=None, ge=0)
    status: Optional[InventoryStatus] = None
    low_comment: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class InventoryItemResponse(BaseModel):
    """Response model for a single inventory item."""
    id: UUID
    name: str
    icon: str
    category: Optional[str] = None
    quantity: float
    unit: Optional[str] = None
    cost_per_unit: Optional[float] = None
    status: InventoryStatus
    low_comment: Optional[str] = None
    last_updated: datetime
    updated_by: str
    establishment: str

    model_config = ConfigDict(from_attributes=True)


class InventoryLogResponse(BaseModel):
    id: UUID
    inventory_item_id: Optional[UUID] = None
    item_name: str
    change: float
    reason: InventoryLogReason
    sale_id: Optional[UUID] = None
    author: str
    establishment: str
    date: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryNode(BaseModel):
    """One folder of the inventory category tree."""
    name: str
    path: str
    item_count: int  # items filed directly in this folder
    total_count: int  # items in this folder and every subfolder
    children: List["CategoryNode"] = []


class CategoryTreeResponse(BaseModel):
    categories: List[CategoryNode]
    uncategorized_count: int
