"""
System-admin maintenance endpoints.
"""
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from flowops.core.deps import require_system_admin
from flowops.core.policy import Principal
from flowops.core.security import cleanup_expired_tokens
from flowops.db.session import get_db
from flowops.services import store

router = APIRouter(prefix="/admin", tags=["admin"])

# table name -> store reporting its row count
STATUS_STORES = {
    "users": store.UserStore,
    "inventory": store.InventoryStore,
    "inventory_logs": store.InventoryLogStore,
    "equipment": store.EquipmentStore,
    "checklist_items": store.ChecklistStore,
    "weekly_tasks": store.WeeklyTaskStore,
    "task_completions": store.TaskCompletionStore,
    "chat_messages": store.ChatStore,
    "timeline_events": store.TimelineStore,
    "menu_items": store.MenuStore,
    "ingredients": store.IngredientStore,
    "sales": store.SaleStore,
    "notifications": store.NotificationStore,
}


class DbStatusResponse(BaseModel):
    status: str
    tables: Dict[str, int]


class PruneTokensResponse(BaseModel):
    removed: int


@router.get("/db-status", response_model=DbStatusResponse)
def db_status(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_system_admin),
):
    """Row count per table."""
    tables = {name: store_cls(db).count() for name, store_cls in STATUS_STORES.items()}
    return DbStatusResponse(status="ok", tables=tables)


@router.post("/prune-tokens", response_model=PruneTokensResponse)
def prune_tokens(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_system_admin),
):
    """Drop blacklist entries whose tokens have expired anyway."""
    return PruneTokensResponse(removed=cleanup_expired_tokens(db))
