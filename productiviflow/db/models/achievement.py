"""Achievement unlock records."""
import uuid

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from productiviflow.db.base import Base
from productiviflow.db.types import UTCDateTime
from productiviflow.utils.dates import utcnow


class AchievementUnlock(Base):
    """One row per achievement a user has earned.

    Definitions live in the static catalog; only the unlock is persisted.
    """

    __tablename__ = "achievement_unlocks"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_key", name="uq_achievement_unlocks_user_key"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    achievement_key = Column(String(100), nullable=False)
    unlocked_at = Column(UTCDateTime, nullable=False, default=utcnow)

    user = relationship("User", backref="achievement_unlocks")
