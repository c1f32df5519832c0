from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from flowops.models.enums import NotificationType


class NotificationResponse(BaseModel):
    id: UUID
    recipient_id: UUID
    type: NotificationType
    title: str
    message: str
    related_user_id: Optional[UUID] = None
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadCountResponse(BaseModel):
    count: int
