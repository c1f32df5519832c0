import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, Uuid

from flowops.db.base import Base, utcnow


class ChecklistItem(Base):
    """One line of an opening, shift or closing checklist."""
    __tablename__ = "checklist_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    list_type = Column(String(20), nullable=False)  # opening, shift, closing
    establishment = Column(String(255), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True))
    completed_by = Column(String(255))
    assigned_to = Column(String(255))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_checklist_items_establishment_type", "establishment", "list_type"),
    )
