import uuid

from sqlalchemy import Column, DateTime, Index, String, Text, Uuid

from flowops.db.base import Base, utcnow


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    establishment = Column(String(255), nullable=False)
    sender = Column(String(255), nullable=False)
    sender_role = Column(String(20), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    type = Column(String(20), nullable=False, default="text")  # text, action

    __table_args__ = (
        Index("idx_chat_messages_establishment_timestamp", "establishment", "timestamp"),
    )
