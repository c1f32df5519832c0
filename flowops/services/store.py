"""
Entity store: typed CRUD repositories over the FlowOps tables.

Every store applies the caller's visibility scope to lists, single reads,
updates and deletes, so a row from another establishment looks exactly like
a missing row. Stores only ``flush``; routers commit once per request.
"""
import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from uuid import UUID

import pydantic
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from flowops.core.errors import Forbidden, NotFound, ValidationError
from flowops.core.policy import Principal, has_global_scope
from flowops.core.security import hash_password
from flowops.db.base import Base, utcnow
from flowops.models import (
    ChatMessage,
    ChecklistItem,
    Equipment,
    Ingredient,
    InventoryItem,
    InventoryLog,
    MenuItem,
    Notification,
    Sale,
    TaskCompletion,
    TimelineEvent,
    User,
    WeeklyTask,
)
from flowops.models.enums import InventoryStatus
from flowops.schemas.checklist import ChecklistItemCreate, ChecklistItemUpdate
from flowops.schemas.equipment import EquipmentCreate, EquipmentUpdate
from flowops.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from flowops.schemas.menu import IngredientCreate, IngredientUpdate, MenuItemCreate, MenuItemUpdate
from flowops.schemas.task import TaskCompletionCreate, WeeklyTaskCreate, WeeklyTaskUpdate
from flowops.schemas.timeline import ChatMessageCreate, TimelineEventCreate
from flowops.schemas.user import UserCreate, UserUpdate
from flowops.services import categories

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
Payload = Union[BaseModel, Dict[str, Any]]


class EntityStore(Generic[ModelT]):
    """
    Generic repository for one table.

    Subclasses set ``model``, the pydantic ``create_schema``/``update_schema``
    used to validate input, and ``order_by``. Override ``_scope`` when
    visibility is not decided by an ``establishment`` column on the row.
    """

    model: Type[ModelT]
    create_schema: Optional[Type[BaseModel]] = None
    update_schema: Optional[Type[BaseModel]] = None
    order_by: tuple = ()

    def __init__(self, db: Session):
        self.db = db

    # -- scope -----------------------------------------------------------

    def _scope(self, stmt: Select, principal: Optional[Principal]) -> Select:
        if principal is None or has_global_scope(principal):
            return stmt
        return stmt.where(self.model.establishment == principal.establishment)

    def _select(self, principal: Optional[Principal]) -> Select:
        return self._scope(select(self.model), principal)

    # -- validation ------------------------------------------------------

    def _validate(self, schema: Optional[Type[BaseModel]], data: Payload, partial: bool) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=partial)
        if schema is None:
            return dict(data)
        try:
            parsed = schema.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError.from_pydantic(exc)
        return parsed.model_dump(exclude_unset=partial)

    def _columns(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Drop keys that are not mapped columns (nested payloads, request-only fields)."""
        mapped = self.model.__table__.columns.keys()
        return {k: v for k, v in values.items() if k in mapped}

    def _before_create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return values

    def _before_update(self, obj: ModelT, changes: Dict[str, Any]) -> Dict[str, Any]:
        return changes

    # -- operations ------------------------------------------------------

    def list(self, principal: Optional[Principal] = None, **filters: Any) -> List[ModelT]:
        stmt = self._select(principal)
        for name, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(self.model, name) == value)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        return list(self.db.execute(stmt).scalars().all())

    def find(self, id: UUID, principal: Optional[Principal] = None) -> Optional[ModelT]:
        stmt = self._select(principal).where(self.model.id == id)
        return self.db.execute(stmt).scalars().first()

    def get(self, id: UUID, principal: Optional[Principal] = None) -> ModelT:
        obj = self.find(id, principal)
        if obj is None:
            raise NotFound(f"{self.model.__name__} not found")
        return obj

    def create(self, data: Payload, **server_fields: Any) -> ModelT:
        """
        Validate ``data`` and insert a row.

        ``server_fields`` (establishment, author, ...) are set by the caller
        and win over anything with the same name in the payload.
        """
        values = self._validate(self.create_schema, data, partial=False)
        values.update(server_fields)
        values = self._before_create(self._columns(values))
        obj = self.model(**values)
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, id: UUID, data: Payload, principal: Optional[Principal] = None, **server_fields: Any) -> ModelT:
        obj = self.get(id, principal)
        changes = self._validate(self.update_schema, data, partial=True)
        changes.update(server_fields)
        changes = self._before_update(obj, self._columns(changes))
        for name, value in changes.items():
            setattr(obj, name, value)
        self.db.flush()
        return obj

    def delete(self, id: UUID, principal: Optional[Principal] = None) -> bool:
        """Delete if present and visible. Deleting a missing row is not an error."""
        obj = self.find(id, principal)
        if obj is None:
            return False
        self.db.delete(obj)
        self.db.flush()
        return True

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(self.model)).scalar_one()


class UserStore(EntityStore[User]):
    model = User
    create_schema = UserCreate
    update_schema = UserUpdate
    order_by = (User.created_at.asc(),)

    def create(self, data: Payload, **server_fields: Any) -> User:
        values = self._validate(self.create_schema, data, partial=False)
        values["email"] = values["email"].lower()
        values["hashed_password"] = hash_password(values.pop("password"))
        values.update(server_fields)
        obj = User(**self._columns(values))
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, id: UUID, data: Payload, principal: Optional[Principal] = None, **server_fields: Any) -> User:
        changes = self._validate(self.update_schema, data, partial=True)
        password = changes.pop("password", None)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        if password:
            server_fields["hashed_password"] = hash_password(password)
        return super().update(id, changes, principal, **server_fields)

    def find_by_login(self, username_or_email: str) -> Optional[User]:
        stmt = select(User).where(
            (User.username == username_or_email) | (User.email == username_or_email.lower())
        )
        return self.db.execute(stmt).scalars().first()

    def exists(self, username: Optional[str] = None, email: Optional[str] = None) -> Optional[str]:
        """Name of the first unique field already taken, if any."""
        if username and self.db.execute(select(User.id).where(User.username == username)).first():
            return "username"
        if email and self.db.execute(select(User.id).where(User.email == email.lower())).first():
            return "email"
        return None


class InventoryStore(EntityStore[InventoryItem]):
    model = InventoryItem
    create_schema = InventoryItemCreate
    update_schema = InventoryItemUpdate
    order_by = (InventoryItem.name.asc(),)

    def _before_create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values["category"] = categories.canonical(values.get("category"))
        if values.get("status") != InventoryStatus.LOW.value:
            values["low_comment"] = None
        return values

    def _before_update(self, obj: InventoryItem, changes: Dict[str, Any]) -> Dict[str, Any]:
        if "category" in changes:
            changes["category"] = categories.canonical(changes["category"])
        status = changes.get("status", obj.status)
        if status != InventoryStatus.LOW.value:
            changes["low_comment"] = None
        changes["last_updated"] = utcnow()
        return changes

    def list(self, principal: Optional[Principal] = None, category: Optional[str] = None, **filters: Any) -> List[InventoryItem]:
        """``category`` matches the folder and all of its subfolders."""
        path = categories.CategoryPath.parse(category)
        if path is None:
            return super().list(principal, **filters)
        stmt = self._select(principal).where(categories.prefix_filter(InventoryItem.category, path))
        for name, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(InventoryItem, name) == value)
        return list(self.db.execute(stmt.order_by(*self.order_by)).scalars().all())

    def category_counts(self, principal: Optional[Principal] = None):
        stmt = self._scope(
            select(InventoryItem.category, func.count(InventoryItem.id)).group_by(InventoryItem.category),
            principal,
        )
        return self.db.execute(stmt).all()


class InventoryLogStore(EntityStore[InventoryLog]):
    model = InventoryLog
    order_by = (InventoryLog.date.desc(),)


class EquipmentStore(EntityStore[Equipment]):
    model = Equipment
    create_schema = EquipmentCreate
    update_schema = EquipmentUpdate
    order_by = (Equipment.created_at.asc(),)


class ChecklistStore(EntityStore[ChecklistItem]):
    model = ChecklistItem
    create_schema = ChecklistItemCreate
    update_schema = ChecklistItemUpdate
    order_by = (ChecklistItem.created_at.asc(),)

    def _before_update(self, obj: ChecklistItem, changes: Dict[str, Any]) -> Dict[str, Any]:
        completed = changes.get("completed")
        if completed is True and not obj.completed:
            changes["completed_at"] = utcnow()
        elif completed is False:
            changes["completed_at"] = None
            changes["completed_by"] = None
        elif completed is True:
            # Already completed; keep the original stamp
            changes.pop("completed_by", None)
        return changes


class WeeklyTaskStore(EntityStore[WeeklyTask]):
    model = WeeklyTask
    create_schema = WeeklyTaskCreate
    update_schema = WeeklyTaskUpdate
    order_by = (WeeklyTask.created_at.asc(),)

    def _before_update(self, obj: WeeklyTask, changes: Dict[str, Any]) -> Dict[str, Any]:
        if changes.get("completed") is True and not obj.completed:
            changes.setdefault("completed_at", utcnow())
        elif changes.get("completed") is False:
            changes["completed_at"] = None
        return changes


class TaskCompletionStore(EntityStore[TaskCompletion]):
    """Append-only; visibility follows the parent task."""
    model = TaskCompletion
    create_schema = TaskCompletionCreate
    order_by = (TaskCompletion.completed_at.desc(),)

    def _scope(self, stmt: Select, principal: Optional[Principal]) -> Select:
        if principal is None or has_global_scope(principal):
            return stmt
        return stmt.join(WeeklyTask, TaskCompletion.task_id == WeeklyTask.id).where(
            WeeklyTask.establishment == principal.establishment
        )


class ChatStore(EntityStore[ChatMessage]):
    model = ChatMessage
    create_schema = ChatMessageCreate
    order_by = (ChatMessage.timestamp.asc(),)


class TimelineStore(EntityStore[TimelineEvent]):
    """Append-only audit trail: no update or delete."""
    model = TimelineEvent
    create_schema = TimelineEventCreate
    order_by = (TimelineEvent.timestamp.desc(),)

    def update(self, *args, **kwargs):
        raise Forbidden("Timeline events are append-only")

    def delete(self, *args, **kwargs):
        raise Forbidden("Timeline events are append-only")


class MenuStore(EntityStore[MenuItem]):
    model = MenuItem
    create_schema = MenuItemCreate
    update_schema = MenuItemUpdate
    order_by = (MenuItem.created_at.asc(),)


class IngredientStore(EntityStore[Ingredient]):
    """Recipe lines; visibility follows the parent menu item."""
    model = Ingredient
    create_schema = IngredientCreate
    update_schema = IngredientUpdate
    order_by = (Ingredient.created_at.asc(),)

    def _scope(self, stmt: Select, principal: Optional[Principal]) -> Select:
        if principal is None or has_global_scope(principal):
            return stmt
        return stmt.join(MenuItem, Ingredient.menu_item_id == MenuItem.id).where(
            MenuItem.establishment == principal.establishment
        )


class SaleStore(EntityStore[Sale]):
    model = Sale
    order_by = (Sale.date.desc(),)

    def recent(self, principal: Optional[Principal], limit: int) -> List[Sale]:
        stmt = self._select(principal).order_by(*self.order_by).limit(limit)
        return list(self.db.execute(stmt).scalars().all())


class NotificationStore(EntityStore[Notification]):
    """A mailbox is private: the scope is the recipient, not the establishment."""
    model = Notification
    order_by = (Notification.created_at.desc(),)

    def _scope(self, stmt: Select, principal: Optional[Principal]) -> Select:
        if principal is None:
            return stmt
        return stmt.where(Notification.recipient_id == principal.id)
