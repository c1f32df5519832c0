"""
Establishment chat.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal
from flowops.db.session import get_db
from flowops.schemas.timeline import ChatMessageCreate, ChatMessageResponse
from flowops.services.store import ChatStore

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("", response_model=List[ChatMessageResponse])
def list_messages(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Messages oldest first, as a conversation reads."""
    return [ChatMessageResponse.model_validate(m) for m in ChatStore(db).list(principal)]


@router.post("", response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED)
def post_message(
    message_data: ChatMessageCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    # Messages always go to the sender's own establishment
    message = ChatStore(db).create(
        message_data,
        establishment=principal.establishment,
        sender=principal.name,
        sender_role=principal.role.value,
    )
    db.commit()
    db.refresh(message)
    return ChatMessageResponse.model_validate(message)
