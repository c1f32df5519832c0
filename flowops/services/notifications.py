"""
Notification mailbox.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from flowops.core.policy import APPROVAL_HIERARCHY, Principal
from flowops.models import Notification, User
from flowops.models.enums import NotificationType, Role, UserStatus
from flowops.services.store import NotificationStore

logger = logging.getLogger(__name__)


class Mailbox:
    """Create, list and mark-read notifications for one database session."""

    def __init__(self, db: Session):
        self.db = db
        self.store = NotificationStore(db)

    def create(
        self,
        recipient_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        related_user_id: Optional[UUID] = None,
    ) -> Notification:
        notification = Notification(
            recipient_id=recipient_id,
            type=NotificationType(type).value,
            title=title,
            message=message,
            related_user_id=related_user_id,
        )
        self.db.add(notification)
        self.db.flush()
        return notification

    def list(self, principal: Principal) -> List[Notification]:
        return self.store.list(principal)

    def unread_count(self, principal: Principal) -> int:
        stmt = select(func.count(Notification.id)).where(
            Notification.recipient_id == principal.id,
            Notification.is_read.is_(False),
        )
        return self.db.execute(stmt).scalar_one()

    def mark_read(self, notification_id: UUID, principal: Principal) -> Notification:
        notification = self.store.get(notification_id, principal)
        notification.is_read = True
        self.db.flush()
        return notification

    def mark_all_read(self, principal: Principal) -> int:
        result = self.db.execute(
            update(Notification)
            .where(Notification.recipient_id == principal.id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def notify_registration(self, applicant: User) -> int:
        """
        Tell everyone who could approve ``applicant`` that a new account is waiting.

        Recipients: every system admin, plus active users of the applicant's
        establishment whose role may approve the applicant's role.
        """
        approver_roles = [
            role.value for role, approvable in APPROVAL_HIERARCHY.items()
            if Role(applicant.role) in approvable
        ]
        stmt = select(User).where(
            User.status == UserStatus.ACTIVE.value,
            User.id != applicant.id,
            (User.is_system_admin.is_(True))
            | ((User.establishment == applicant.establishment) & User.role.in_(approver_roles)),
        )
        recipients = self.db.execute(stmt).scalars().all()
        for recipient in recipients:
            self.create(
                recipient.id,
                NotificationType.USER_REGISTRATION,
                "New user registration",
                f"{applicant.name} ({applicant.username}) registered for {applicant.establishment} "
                f"and is awaiting approval",
                related_user_id=applicant.id,
            )
        logger.info(f"Registration of {applicant.username} notified {len(recipients)} approver(s)")
        return len(recipients)
