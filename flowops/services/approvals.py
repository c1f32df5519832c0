"""
User approval workflow.

    pending --approve--> active
    pending --reject---> removed
    active --deactivate-> removed

``removed`` is terminal. Approve and reject are gated by the role hierarchy
and the establishment fence; deactivation by user-management rights.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from flowops.core.errors import Forbidden, ValidationError
from flowops.core.policy import (
    ASSIGNABLE_ROLES,
    Principal,
    approvable_roles,
    can_manage_users,
    can_see,
    ensure_can_review,
    has_global_scope,
)
from flowops.models import User
from flowops.models.enums import Role, UserStatus
from flowops.services.store import UserStore
from flowops.services.timeline import TimelineRecorder

logger = logging.getLogger(__name__)


class ApprovalService:

    def __init__(self, db: Session):
        self.db = db
        self.users = UserStore(db)
        self.timeline = TimelineRecorder(db)

    def list_pending(self, principal: Principal) -> List[User]:
        """Pending accounts the principal could actually approve."""
        roles = [role.value for role in approvable_roles(principal)]
        if not roles:
            return []
        stmt = select(User).where(User.status == UserStatus.PENDING.value, User.role.in_(roles))
        if not has_global_scope(principal):
            stmt = stmt.where(User.establishment == principal.establishment)
        return list(self.db.execute(stmt.order_by(User.created_at.asc())).scalars().all())

    def _pending_target(self, principal: Principal, user_id: UUID) -> User:
        # Unscoped read: a fenced-off target is a 403, not a 404
        target = self.users.get(user_id)
        ensure_can_review(principal, target)
        if target.status != UserStatus.PENDING.value:
            raise ValidationError.single("status", f"User is {target.status}, not pending")
        return target

    def approve(self, principal: Principal, user_id: UUID, role: Optional[Role] = None) -> User:
        target = self._pending_target(principal, user_id)
        granted = Role(role) if role is not None else Role(target.role)
        if granted not in ASSIGNABLE_ROLES or granted not in approvable_roles(principal):
            raise Forbidden(f"A {principal.role.value} cannot grant the {granted.value} role")

        target.role = granted.value
        target.status = UserStatus.ACTIVE.value
        self.db.flush()
        self.timeline.user_approved(principal, target)
        logger.info(f"{principal.name} approved {target.username} as {granted.value}")
        return target

    def reject(self, principal: Principal, user_id: UUID) -> User:
        target = self._pending_target(principal, user_id)
        target.status = UserStatus.REMOVED.value
        self.db.flush()
        logger.info(f"{principal.name} rejected {target.username}")
        return target

    def deactivate(self, principal: Principal, user_id: UUID) -> User:
        if not can_manage_users(principal):
            raise Forbidden()
        target = self.users.get(user_id)
        if target.id == principal.id:
            raise Forbidden("You cannot deactivate your own account")
        if target.is_system_admin:
            raise Forbidden("System admin accounts cannot be deactivated")
        if not can_see(principal, target.establishment):
            raise Forbidden("Cannot manage users from another establishment")
        if target.status != UserStatus.ACTIVE.value:
            raise ValidationError.single("status", f"User is {target.status}, not active")

        target.status = UserStatus.REMOVED.value
        self.db.flush()
        logger.info(f"{principal.name} deactivated {target.username}")
        return target
