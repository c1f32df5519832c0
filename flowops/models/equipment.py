import uuid

from sqlalchemy import Column, DateTime, String, Text, Uuid

from flowops.db.base import Base, utcnow
from flowops.models.enums import EquipmentStatus


class Equipment(Base):
    """Kitchen/front-of-house equipment and its working state."""
    __tablename__ = "equipment"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    category = Column(String(255))  # location or equipment family
    status = Column(String(20), nullable=False, default=EquipmentStatus.WORKING.value)
    last_issue = Column(Text)
    establishment = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
