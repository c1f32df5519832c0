from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from flowops.models.enums import EquipmentStatus


class EquipmentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=255)
    status: EquipmentStatus = EquipmentStatus.WORKING
    last_issue: Optional[str] = None
    establishment: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=255)
    status: Optional[EquipmentStatus] = None
    last_issue: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class EquipmentResponse(BaseModel):
    id: UUID
    name: str
    category: Optional[str] = None
    status: EquipmentStatus
    last_issue: Optional[str] = None
    establishment: str

    model_config = ConfigDict(from_attributes=True)
