"""
Timeline (audit log) router. Events can be posted and read, never edited.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal
from flowops.db.session import get_db
from flowops.schemas.timeline import TimelineEventCreate, TimelineEventResponse
from flowops.services.store import TimelineStore

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("", response_model=List[TimelineEventResponse])
def list_events(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Events newest first."""
    return [TimelineEventResponse.model_validate(e) for e in TimelineStore(db).list(principal)]


@router.post("", response_model=TimelineEventResponse, status_code=status.HTTP_201_CREATED)
def post_event(
    event_data: TimelineEventCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    event = TimelineStore(db).create(
        event_data,
        establishment=principal.establishment,
        author=principal.name,
        author_role=principal.role.value,
    )
    db.commit()
    db.refresh(event)
    return TimelineEventResponse.model_validate(event)
