"""
User accounts.
"""
import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, String, Uuid
from sqlalchemy.orm import relationship

from flowops.db.base import Base, utcnow
from flowops.models.enums import Role, UserStatus


class User(Base):
    """
    A staff account.

    ``role`` and ``is_system_admin`` are independent: only the flag grants
    access across establishments.
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(100), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.EMPLOYEE.value)
    status = Column(String(20), nullable=False, default=UserStatus.PENDING.value)
    establishment = Column(String(255), nullable=False)
    phone_number = Column(String(50))
    is_system_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    notifications = relationship(
        "Notification",
        back_populates="recipient",
        cascade="all, delete-orphan",
        passive_deletes=True,
        foreign_keys="Notification.recipient_id",
    )

    __table_args__ = (
        Index("idx_users_establishment_status", "establishment", "status"),
    )
