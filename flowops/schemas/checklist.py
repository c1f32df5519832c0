from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from flowops.models.enums import ListType


class ChecklistItemCreate(BaseModel):
    text: str = Field(min_length=1)
    list_type: ListType
    assigned_to: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None
    establishment: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class ChecklistItemUpdate(BaseModel):
    """Partial update. ``completed`` stamps or clears the completion fields."""
    text: Optional[str] = Field(default=None, min_length=1)
    list_type: Optional[ListType] = None
    completed: Optional[bool] = None
    assigned_to: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class ChecklistItemResponse(BaseModel):
    id: UUID
    text: str
    list_type: ListType
    establishment: str
    completed: bool
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
