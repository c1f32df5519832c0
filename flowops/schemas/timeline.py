from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from flowops.models.enums import ChatMessageType, TimelineEventType


class TimelineEventCreate(BaseModel):
    """Manual timeline post; author fields always come from the session."""
    text: str = Field(min_length=1)
    type: TimelineEventType = TimelineEventType.INFO
    comment: Optional[str] = None
    photo: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class TimelineEventResponse(BaseModel):
    id: UUID
    text: str
    establishment: str
    author: str
    author_role: str
    timestamp: datetime
    type: TimelineEventType
    comment: Optional[str] = None
    photo: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ChatMessageCreate(BaseModel):
    text: str = Field(min_length=1, max_length=4000)
    type: ChatMessageType = ChatMessageType.TEXT

    model_config = ConfigDict(use_enum_values=True)


class ChatMessageResponse(BaseModel):
    id: UUID
    text: str
    establishment: str
    sender: str
    sender_role: str
    timestamp: datetime
    type: ChatMessageType

    model_config = ConfigDict(from_attributes=True)
