"""User database model."""
from datetime import datetime
import uuid

from sqlalchemy import Column, Integer, String
from sqlalchemy.dialects.postgresql import UUID

from productiviflow.db.base import Base
from productiviflow.db.types import UTCDateTime
from productiviflow.utils.dates import utcnow


class User(Base):
    """Represents an application user."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    # Gamification
    points = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    last_active_date = Column(UTCDateTime, nullable=False, default=utcnow)

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    def mark_active(self, when: datetime) -> None:
        """Record the timestamp of the latest login-derived activity."""

        self.last_active_date = when
