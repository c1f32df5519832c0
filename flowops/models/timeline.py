import uuid

from sqlalchemy import Column, DateTime, Index, String, Text, Uuid

from flowops.db.base import Base, utcnow


class TimelineEvent(Base):
    """
    Audit trail entry. Rows are only ever inserted; there is no update or
    delete path anywhere in the service.
    """
    __tablename__ = "timeline_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    establishment = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    author_role = Column(String(20), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    type = Column(String(20), nullable=False)  # info, success, warning, alert
    comment = Column(Text)
    photo = Column(Text)

    __table_args__ = (
        Index("idx_timeline_events_establishment_timestamp", "establishment", "timestamp"),
    )
