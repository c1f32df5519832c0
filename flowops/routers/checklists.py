"""
Opening, shift and closing checklists.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal, resolve_establishment
from flowops.db.session import get_db
from flowops.models.enums import ListType
from flowops.schemas.checklist import ChecklistItemCreate, ChecklistItemResponse, ChecklistItemUpdate
from flowops.schemas.common import MessageResponse
from flowops.services.store import ChecklistStore
from flowops.services.timeline import TimelineRecorder

router = APIRouter(prefix="/checklists", tags=["checklists"])


@router.get("", response_model=List[ChecklistItemResponse])
def list_checklist_items(
    list_type: Optional[ListType] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    items = ChecklistStore(db).list(principal, list_type=list_type.value if list_type else None)
    return [ChecklistItemResponse.model_validate(item) for item in items]


@router.post("", response_model=ChecklistItemResponse, status_code=status.HTTP_201_CREATED)
def create_checklist_item(
    item_data: ChecklistItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    item = ChecklistStore(db).create(
        item_data,
        establishment=resolve_establishment(principal, item_data.establishment),
    )
    TimelineRecorder(db).checklist_created(principal, item)
    db.commit()
    db.refresh(item)
    return ChecklistItemResponse.model_validate(item)


@router.patch("/{item_id}", response_model=ChecklistItemResponse)
def update_checklist_item(
    item_id: UUID,
    update_data: ChecklistItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Update a checklist item.

    Completing it stamps who and when and posts to the timeline; un-checking
    it clears the stamp.
    """
    store = ChecklistStore(db)
    was_completed = store.get(item_id, principal).completed

    server_fields = {}
    if update_data.completed is True and not was_completed:
        server_fields["completed_by"] = principal.name
    item = store.update(item_id, update_data, principal, **server_fields)

    if item.completed and not was_completed:
        TimelineRecorder(db).checklist_completed(principal, item)
    db.commit()
    db.refresh(item)
    return ChecklistItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_checklist_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ChecklistStore(db).delete(item_id, principal)
    db.commit()
    return MessageResponse(message="Checklist item deleted")
