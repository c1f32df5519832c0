import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from flowops.db.base import Base, utcnow


class Notification(Base):
    """Mailbox entry for one recipient."""
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False)  # user_registration, system
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    related_user_id = Column(Uuid)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    recipient = relationship("User", back_populates="notifications", foreign_keys=[recipient_id])
