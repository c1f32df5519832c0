"""
Weekly tasks and their photo-proof completion history.
"""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from flowops.db.base import Base, utcnow


class WeeklyTask(Base):
    __tablename__ = "weekly_tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    establishment = Column(String(255), nullable=False, index=True)
    assigned_to = Column(String(255), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    completions = relationship(
        "TaskCompletion",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TaskCompletion(Base):
    """Append-only record of one completion of a weekly task."""
    __tablename__ = "task_completions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    task_id = Column(Uuid, ForeignKey("weekly_tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    completed_by = Column(String(255), nullable=False)
    photo = Column(Text, nullable=False)

    task = relationship("WeeklyTask", back_populates="completions")
