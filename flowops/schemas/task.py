"""
Weekly task schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WeeklyTaskCreate(BaseModel):
    text: str = Field(min_length=1)
    assigned_to: str = Field(min_length=1, max_length=255)
    notes: Optional[str] = None
    establishment: Optional[str] = None


class WeeklyTaskUpdate(BaseModel):
    text: Optional[str] = Field(default=None, min_length=1)
    assigned_to: Optional[str] = Field(default=None, min_length=1, max_length=255)
    completed: Optional[bool] = None
    notes: Optional[str] = None


class WeeklyTaskResponse(BaseModel):
    id: UUID
    text: str
    establishment: str
    assigned_to: str
    completed: bool
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TaskCompleteRequest(BaseModel):
    """Photo proof (data URL or image URL) is mandatory."""
    photo: str = Field(min_length=1)


class TaskCompletionCreate(BaseModel):
    task_id: UUID
    completed_by: str = Field(min_length=1)
    photo: str = Field(min_length=1)


class TaskCompletionResponse(BaseModel):
    id: UUID
    task_id: UUID
    completed_at: datetime
    completed_by: str
    photo: str

    model_config = ConfigDict(from_attributes=True)
