"""
Equipment router.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal, resolve_establishment
from flowops.db.session import get_db
from flowops.schemas.common import MessageResponse
from flowops.schemas.equipment import EquipmentCreate, EquipmentResponse, EquipmentUpdate
from flowops.services.store import EquipmentStore
from flowops.services.timeline import TimelineRecorder

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.get("", response_model=List[EquipmentResponse])
def list_equipment(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return [EquipmentResponse.model_validate(e) for e in EquipmentStore(db).list(principal)]


@router.get("/{equipment_id}", response_model=EquipmentResponse)
def get_equipment(
    equipment_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return EquipmentResponse.model_validate(EquipmentStore(db).get(equipment_id, principal))


@router.post("", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
def create_equipment(
    equipment_data: EquipmentCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    equipment = EquipmentStore(db).create(
        equipment_data,
        establishment=resolve_establishment(principal, equipment_data.establishment),
    )
    db.commit()
    db.refresh(equipment)
    return EquipmentResponse.model_validate(equipment)


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
def update_equipment(
    equipment_id: UUID,
    update_data: EquipmentUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Update equipment; status changes are posted to the timeline."""
    store = EquipmentStore(db)
    previous_status = store.get(equipment_id, principal).status

    equipment = store.update(equipment_id, update_data, principal)
    TimelineRecorder(db).equipment_status_changed(principal, equipment, previous_status)
    db.commit()
    db.refresh(equipment)
    return EquipmentResponse.model_validate(equipment)


@router.delete("/{equipment_id}", response_model=MessageResponse)
def delete_equipment(
    equipment_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    EquipmentStore(db).delete(equipment_id, principal)
    db.commit()
    return MessageResponse(message="Equipment deleted")
