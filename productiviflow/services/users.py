"""Service layer for user operations."""
from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy.orm import Session

from productiviflow.core.gamification import next_streak
from productiviflow.db.models.user import User
from productiviflow.schemas.user import UserUpdate
from productiviflow.utils.cache import invalidate_profile
from productiviflow.utils.dates import get_timezone, local_day, utcnow


class UserService:
    """Profile edits and the login streak."""

    def __init__(self, db: Session):
        self.db = db

    def update(self, user: User, payload: UserUpdate) -> User:
        """Persist profile changes and return the updated entity."""

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        invalidate_profile(user.id)
        return user

    def record_login(self, user: User, *, now: datetime | None = None) -> User:
        """Advance the day-over-day streak for a login at ``now``.

        Both timestamps are reduced to calendar days first; the stored
        ``last_active_date`` keeps the full login time.
        """

        now = now or utcnow()
        tz = get_timezone()
        last_day = local_day(user.last_active_date, tz) if user.last_active_date else None
        previous = user.streak or 0

        user.streak = next_streak(previous, local_day(now, tz), last_day)
        user.mark_active(now)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        invalidate_profile(user.id)

        if user.streak != previous:
            logger.info("Streak updated", user_id=str(user.id), previous=previous, streak=user.streak)
        return user
