"""Task database model."""
import uuid

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from productiviflow.core.gamification.types import TaskPriority, TaskStatus
from productiviflow.db.base import Base
from productiviflow.db.types import StringList, UTCDateTime
from productiviflow.utils.dates import utcnow


class Task(Base):
    """A unit of work living in a section and optionally a subsection."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_status", "user_id", "status"),
        CheckConstraint("type IN ('daily', 'deadline')", name="type"),
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="priority"),
        CheckConstraint("status IN ('pending', 'completed')", name="status"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    section_id = Column(
        UUID(as_uuid=True), ForeignKey("sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # NULL means the task hangs directly off its section
    subsection_id = Column(
        UUID(as_uuid=True), ForeignKey("subsections.id", ondelete="CASCADE"), nullable=True, index=True
    )

    title = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    target_date = Column(UTCDateTime)
    deadline = Column(UTCDateTime)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    tags = Column(StringList, nullable=False, default=list)

    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    completed_at = Column(UTCDateTime)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    section = relationship("Section")

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED.value
