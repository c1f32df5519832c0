"""
Notification mailbox router. Every route works on the caller's own mailbox.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal
from flowops.db.session import get_db
from flowops.schemas.common import MessageResponse
from flowops.schemas.notification import NotificationResponse, UnreadCountResponse
from flowops.services.notifications import Mailbox

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return [NotificationResponse.model_validate(n) for n in Mailbox(db).list(principal)]


@router.get("/count", response_model=UnreadCountResponse)
def unread_count(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return UnreadCountResponse(count=Mailbox(db).unread_count(principal))


@router.post("/read-all", response_model=MessageResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    updated = Mailbox(db).mark_all_read(principal)
    db.commit()
    return MessageResponse(message=f"{updated} notification(s) marked as read")


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    notification = Mailbox(db).mark_read(notification_id, principal)
    db.commit()
    db.refresh(notification)
    return NotificationResponse.model_validate(notification)
