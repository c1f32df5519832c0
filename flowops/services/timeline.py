"""
Audit timeline recorder.

Routers call one helper per mutation after it succeeds; each helper appends
at most one event authored by the acting principal and filed under the
affected entity's establishment.
"""
from typing import Optional

from sqlalchemy.orm import Session

from flowops.core.policy import Principal
from flowops.models import ChecklistItem, Equipment, InventoryItem, MenuItem, TimelineEvent, User, WeeklyTask
from flowops.models.enums import EquipmentStatus, InventoryStatus, TimelineEventType


class TimelineRecorder:

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        principal: Principal,
        establishment: str,
        text: str,
        type: TimelineEventType = TimelineEventType.INFO,
        comment: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> TimelineEvent:
        event = TimelineEvent(
            text=text,
            establishment=establishment,
            author=principal.name,
            author_role=principal.role.value,
            type=TimelineEventType(type).value,
            comment=comment,
            photo=photo,
        )
        self.db.add(event)
        self.db.flush()
        return event

    def inventory_created(self, principal: Principal, item: InventoryItem) -> TimelineEvent:
        return self.record(principal, item.establishment, f"Added new item: {item.name}")

    def inventory_status_changed(
        self, principal: Principal, item: InventoryItem, previous_status: str
    ) -> Optional[TimelineEvent]:
        if item.status == previous_status:
            return None
        if item.status == InventoryStatus.LOW.value:
            event_type = TimelineEventType.WARNING
        elif item.status == InventoryStatus.OUT.value:
            event_type = TimelineEventType.ALERT
        else:
            return None
        return self.record(
            principal,
            item.establishment,
            f"{item.name} marked {item.status}",
            event_type,
            comment=item.low_comment,
        )

    def equipment_status_changed(
        self, principal: Principal, equipment: Equipment, previous_status: str
    ) -> Optional[TimelineEvent]:
        if equipment.status == previous_status:
            return None
        if equipment.status == EquipmentStatus.BROKEN.value:
            return self.record(
                principal,
                equipment.establishment,
                f"{equipment.name} reported BROKEN",
                TimelineEventType.ALERT,
                comment=equipment.last_issue,
            )
        if equipment.status == EquipmentStatus.ATTENTION.value:
            return self.record(
                principal, equipment.establishment, f"{equipment.name} needs attention", TimelineEventType.WARNING
            )
        # Working, coming back from Attention or Broken
        return self.record(
            principal, equipment.establishment, f"{equipment.name} fixed/working", TimelineEventType.SUCCESS
        )

    def checklist_created(self, principal: Principal, item: ChecklistItem) -> TimelineEvent:
        return self.record(
            principal,
            item.establishment,
            f"New {item.list_type} item: {item.text} (Assigned to {item.assigned_to or 'Unassigned'})",
        )

    def checklist_completed(self, principal: Principal, item: ChecklistItem) -> TimelineEvent:
        return self.record(
            principal,
            item.establishment,
            f"{item.list_type} Checklist: {item.text} completed",
            TimelineEventType.SUCCESS,
        )

    def task_created(self, principal: Principal, task: WeeklyTask) -> TimelineEvent:
        return self.record(
            principal,
            task.establishment,
            f"New Weekly Task: {task.text} (Assigned to {task.assigned_to})",
        )

    def task_completed(self, principal: Principal, task: WeeklyTask, photo: str) -> TimelineEvent:
        return self.record(
            principal,
            task.establishment,
            f"Weekly task completed: {task.text} by {principal.name}",
            TimelineEventType.SUCCESS,
            comment="Photo proof attached",
            photo=photo,
        )

    def menu_item_created(self, principal: Principal, item: MenuItem) -> TimelineEvent:
        return self.record(principal, item.establishment, f"Menu Item Added: {item.name}")

    def user_approved(self, principal: Principal, user: User) -> TimelineEvent:
        return self.record(
            principal,
            user.establishment,
            f"Approved {user.name} as {user.role}",
            TimelineEventType.SUCCESS,
        )
