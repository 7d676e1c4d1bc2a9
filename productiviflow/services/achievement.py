"""Achievement unlocks for completed-task, streak and point milestones."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List

from loguru import logger
from sqlalchemy import and_, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from productiviflow.core.gamification import (
    ACHIEVEMENT_CATALOG,
    AchievementDefinition,
    AchievementSnapshot,
    TaskStatus,
    TaskType,
)
from productiviflow.db.models.achievement import AchievementUnlock
from productiviflow.db.models.task import Task
from productiviflow.db.models.user import User
from productiviflow.utils.cache import invalidate_profile
from productiviflow.utils.dates import utcnow
from productiviflow.utils.exceptions import NotFoundError


@dataclass(slots=True)
class UnlockedAchievement:
    """An achievement granted by a check, with the grant time."""

    definition: AchievementDefinition
    unlocked_at: datetime


@dataclass(slots=True)
class AchievementStatus:
    """Catalog entry paired with the user's unlock record, if any."""

    definition: AchievementDefinition
    unlocked_at: datetime | None

    @property
    def unlocked(self) -> bool:
        return self.unlocked_at is not None


class AchievementService:
    """Evaluate the static catalog against a user's current state."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def unlocked_at_by_key(self, user_id: uuid.UUID) -> dict[str, datetime]:
        rows = self.db.execute(
            select(AchievementUnlock.achievement_key, AchievementUnlock.unlocked_at).where(
                AchievementUnlock.user_id == user_id
            )
        ).all()
        return {key: unlocked_at for key, unlocked_at in rows}

    def completed_task_count(self, user_id: uuid.UUID) -> int:
        return self.db.scalar(
            select(func.count(Task.id)).where(
                Task.user_id == user_id,
                Task.status == TaskStatus.COMPLETED.value,
            )
        ) or 0

    def early_completion_count(self, user_id: uuid.UUID) -> int:
        """Completed deadline tasks whose completion came before the deadline."""

        return self.db.scalar(
            select(func.count(Task.id)).where(
                and_(
                    Task.user_id == user_id,
                    Task.status == TaskStatus.COMPLETED.value,
                    Task.type == TaskType.DEADLINE.value,
                    Task.deadline.is_not(None),
                    Task.completed_at.is_not(None),
                    Task.completed_at < Task.deadline,
                )
            )
        ) or 0

    def build_snapshot(self, user: User) -> AchievementSnapshot:
        return AchievementSnapshot(
            completed_tasks=self.completed_task_count(user.id),
            early_completions=self.early_completion_count(user.id),
            streak=user.streak or 0,
            points=user.points or 0,
        )

    def list_for_user(self, user_id: uuid.UUID) -> List[AchievementStatus]:
        """Return the whole catalog in evaluation order with unlock state."""

        unlocked = self.unlocked_at_by_key(user_id)
        return [
            AchievementStatus(definition=definition, unlocked_at=unlocked.get(definition.key))
            for definition in ACHIEVEMENT_CATALOG
        ]

    # ------------------------------------------------------------------
    # Unlock logic
    # ------------------------------------------------------------------
    def check_achievements(
        self, user_id: uuid.UUID, *, now: datetime | None = None
    ) -> List[UnlockedAchievement]:
        """Grant every catalog entry the user newly satisfies.

        Entries are visited in catalog order. Points and streak are re-read
        before each predicate so a reward granted earlier in the same pass
        counts toward later thresholds. Running the check again without a
        state change grants nothing.
        """

        # Completion bumps points with an UPDATE that bypasses the identity map
        user = self.db.get(User, user_id, populate_existing=True)
        if user is None:
            raise NotFoundError("User not found", {"user_id": str(user_id)})

        now = now or utcnow()
        already_unlocked = self.unlocked_at_by_key(user_id)
        snapshot = self.build_snapshot(user)
        newly_unlocked: List[UnlockedAchievement] = []

        for definition in ACHIEVEMENT_CATALOG:
            if definition.key in already_unlocked:
                continue
            if not definition.is_satisfied(snapshot):
                continue
            if not self._grant(user_id, definition, now):
                continue

            newly_unlocked.append(UnlockedAchievement(definition=definition, unlocked_at=now))
            self.db.refresh(user)
            snapshot = AchievementSnapshot(
                completed_tasks=snapshot.completed_tasks,
                early_completions=snapshot.early_completions,
                streak=user.streak or 0,
                points=user.points or 0,
            )

        if newly_unlocked:
            invalidate_profile(user_id)
        return newly_unlocked

    def _grant(self, user_id: uuid.UUID, definition: AchievementDefinition, now: datetime) -> bool:
        """Insert the unlock row and pay out its reward in one transaction.

        Returns ``False`` when a concurrent check already recorded the same
        unlock; the unique constraint on (user, key) makes that insert fail.
        """

        self.db.add(
            AchievementUnlock(user_id=user_id, achievement_key=definition.key, unlocked_at=now)
        )
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.info(
                "Achievement already unlocked by a concurrent check",
                user_id=str(user_id),
                achievement=definition.key,
            )
            return False

        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(points=User.points + definition.points)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.info(
            "Achievement unlocked",
            user_id=str(user_id),
            achievement=definition.key,
            reward=definition.points,
        )
        return True


__all__ = [
    "AchievementService",
    "AchievementStatus",
    "UnlockedAchievement",
]
