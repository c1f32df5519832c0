"""
Inventory router: stock items, category folders and the quantity ledger.
"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal, resolve_establishment
from flowops.db.session import get_db
from flowops.models import InventoryLog
from flowops.models.enums import InventoryLogReason, InventoryStatus
from flowops.schemas.common import MessageResponse
from flowops.schemas.inventory import (
    CategoryTreeResponse,
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventoryLogResponse,
)
from flowops.services.categories import build_tree
from flowops.services.store import InventoryLogStore, InventoryStore
from flowops.services.timeline import TimelineRecorder

router = APIRouter(prefix="/inventory", tags=["inventory"])
logs_router = APIRouter(prefix="/inventory-logs", tags=["inventory"])


@router.get("", response_model=List[InventoryItemResponse])
def list_inventory(
    category: Optional[str] = Query(None, description="Category folder; includes subfolders"),
    status_filter: Optional[InventoryStatus] = Query(None, alias="status", description="Only items with this status"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Inventory items ordered by name."""
    items = InventoryStore(db).list(
        principal,
        category=category,
        status=status_filter.value if status_filter else None,
    )
    return [InventoryItemResponse.model_validate(item) for item in items]


@router.get("/categories", response_model=CategoryTreeResponse)
def list_categories(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Category folder tree with direct and total item counts."""
    roots, uncategorized = build_tree(InventoryStore(db).category_counts(principal))
    return CategoryTreeResponse(categories=roots, uncategorized_count=uncategorized)


@router.get("/{item_id}", response_model=InventoryItemResponse)
def get_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return InventoryItemResponse.model_validate(InventoryStore(db).get(item_id, principal))


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    item_data: InventoryItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    item = InventoryStore(db).create(
        item_data,
        establishment=resolve_establishment(principal, item_data.establishment),
        updated_by=principal.name,
    )
    TimelineRecorder(db).inventory_created(principal, item)
    db.commit()
    db.refresh(item)
    return InventoryItemResponse.model_validate(item)


@router.patch("/{item_id}", response_model=InventoryItemResponse)
def update_inventory_item(
    item_id: UUID,
    update_data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Update an inventory item.

    A status change to LOW or OUT is posted to the timeline; a quantity
    change is written to the inventory log as a manual adjustment.
    """
    store = InventoryStore(db)
    item = store.get(item_id, principal)
    previous_status = item.status
    previous_quantity = Decimal(str(item.quantity))

    item = store.update(item_id, update_data, principal, updated_by=principal.name)

    quantity = Decimal(str(item.quantity))
    if quantity != previous_quantity:
        db.add(InventoryLog(
            inventory_item_id=item.id,
            item_name=item.name,
            change=quantity - previous_quantity,
            reason=InventoryLogReason.ADJUSTMENT.value,
            author=principal.name,
            establishment=item.establishment,
        ))
    TimelineRecorder(db).inventory_status_changed(principal, item, previous_status)
    db.commit()
    db.refresh(item)
    return InventoryItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Delete an item. Recipe lines linked to it are unlinked, not removed."""
    InventoryStore(db).delete(item_id, principal)
    db.commit()
    return MessageResponse(message="Item deleted")


@logs_router.get("", response_model=List[InventoryLogResponse])
def list_inventory_logs(
    inventory_item_id: Optional[UUID] = Query(None),
    reason: Optional[InventoryLogReason] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Quantity movements, newest first."""
    logs = InventoryLogStore(db).list(
        principal,
        inventory_item_id=inventory_item_id,
        reason=reason.value if reason else None,
    )
    return [InventoryLogResponse.model_validate(log) for log in logs]
