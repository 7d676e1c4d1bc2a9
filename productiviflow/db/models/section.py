"""Section and subsection models forming the task hierarchy."""
import uuid

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from productiviflow.db.base import Base
from productiviflow.db.types import UTCDateTime
from productiviflow.utils.dates import utcnow

DEFAULT_SECTION_ICON = "📁"


class Section(Base):
    """Top level grouping owned by a single user."""

    __tablename__ = "sections"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    icon = Column(String(32), nullable=False, default=DEFAULT_SECTION_ICON)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    user = relationship("User", backref="sections")


class Subsection(Base):
    """Second level grouping; ``user_id`` is denormalized for scoping."""

    __tablename__ = "subsections"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    section_id = Column(
        UUID(as_uuid=True), ForeignKey("sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    section = relationship("Section", backref="subsections")
