"""Task creation, editing and the completion lifecycle."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Tuple

from loguru import logger
from sqlalchemy import and_, or_, select, update
from sqlalchemy.orm import Session, joinedload

from productiviflow.core.gamification import TaskStatus, TaskType, calculate_task_points
from productiviflow.db.models.section import Subsection
from productiviflow.db.models.task import Task
from productiviflow.db.models.user import User
from productiviflow.schemas.task import TaskCreate, TaskUpdate
from productiviflow.services.achievement import AchievementService, UnlockedAchievement
from productiviflow.services.sections import SectionService
from productiviflow.utils.cache import invalidate_profile
from productiviflow.utils.dates import day_range, ensure_aware, utcnow
from productiviflow.utils.exceptions import (
    AlreadyCompletedError,
    InvalidStateError,
    NotFoundError,
)


@dataclass(slots=True)
class TaskCompletion:
    """Outcome of completing a task."""

    task: Task
    points_earned: int
    total_points: int
    new_achievements: List[UnlockedAchievement]


def resolve_anchor(
    task_type: str,
    target_date: datetime | None,
    deadline: datetime | None,
    now: datetime,
) -> Tuple[datetime | None, datetime | None]:
    """Return ``(target_date, deadline)`` with only the field the type uses.

    Daily tasks default to ``now``; a deadline task without a deadline is
    rejected.
    """

    if TaskType(task_type) is TaskType.DAILY:
        return ensure_aware(target_date or now), None
    if deadline is None:
        raise InvalidStateError(
            "Deadline tasks require a deadline", {"type": TaskType.DEADLINE.value}
        )
    return None, ensure_aware(deadline)


class TaskService:
    """Task operations scoped to the owning user."""

    def __init__(self, db: Session, *, section_service: SectionService | None = None) -> None:
        self.db = db
        self.sections = section_service or SectionService(db)

    def get_task(self, user: User, task_id: uuid.UUID) -> Task:
        task = self.db.scalar(select(Task).where(Task.id == task_id, Task.user_id == user.id))
        if task is None:
            raise NotFoundError("Task not found", {"task_id": str(task_id)})
        return task

    def _subsection_in_section(
        self, user: User, subsection_id: uuid.UUID, section_id: uuid.UUID
    ) -> Subsection:
        subsection = self.sections.get_subsection(user, subsection_id)
        if subsection.section_id != section_id:
            raise NotFoundError(
                "Subsection not found in section",
                {"subsection_id": str(subsection_id), "section_id": str(section_id)},
            )
        return subsection

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def create_task(self, user: User, payload: TaskCreate, *, now: datetime | None = None) -> Task:
        section = self.sections.get_section(user, payload.section_id)
        if payload.subsection_id is not None:
            self._subsection_in_section(user, payload.subsection_id, section.id)

        target_date, deadline = resolve_anchor(
            payload.type, payload.target_date, payload.deadline, now or utcnow()
        )
        task = Task(
            user_id=user.id,
            section_id=section.id,
            subsection_id=payload.subsection_id,
            title=payload.title,
            type=payload.type,
            target_date=target_date,
            deadline=deadline,
            priority=payload.priority,
            tags=list(payload.tags),
            status=TaskStatus.PENDING.value,
        )
        self.db.add(task)
        self.db.commit()
        invalidate_profile(user.id)
        self.db.refresh(task)
        return task

    def update_task(
        self, user: User, task_id: uuid.UUID, payload: TaskUpdate, *, now: datetime | None = None
    ) -> Task:
        """Apply a partial edit. Status is never changed here."""

        task = self.get_task(user, task_id)
        fields = payload.model_fields_set

        if "subsection_id" in fields:
            if payload.subsection_id is not None:
                self._subsection_in_section(user, payload.subsection_id, task.section_id)
            task.subsection_id = payload.subsection_id

        if fields & {"type", "target_date", "deadline"}:
            task_type = payload.type or task.type
            target_date = payload.target_date if "target_date" in fields else task.target_date
            deadline = payload.deadline if "deadline" in fields else task.deadline
            task.target_date, task.deadline = resolve_anchor(
                task_type, target_date, deadline, now or utcnow()
            )
            task.type = task_type

        if payload.title is not None:
            task.title = payload.title
        if payload.priority is not None:
            task.priority = payload.priority
        if payload.tags is not None:
            task.tags = list(payload.tags)

        self.db.commit()
        self.db.refresh(task)
        return task

    def delete_task(self, user: User, task_id: uuid.UUID) -> None:
        task = self.get_task(user, task_id)
        self.db.delete(task)
        self.db.commit()
        invalidate_profile(user.id)

    def tasks_for_day(self, user: User, day: date) -> List[Task]:
        """Tasks whose target date or deadline falls on ``day``, with their section loaded."""

        start, end = day_range(day, day)
        stmt = (
            select(Task)
            .options(joinedload(Task.section))
            .where(
                Task.user_id == user.id,
                or_(
                    and_(Task.target_date >= start, Task.target_date < end),
                    and_(Task.deadline >= start, Task.deadline < end),
                ),
            )
            .order_by(Task.created_at)
        )
        return list(self.db.scalars(stmt))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def complete_task(
        self, user: User, task_id: uuid.UUID, *, now: datetime | None = None
    ) -> TaskCompletion:
        """Mark a pending task completed, award points and check achievements.

        The status flip is a conditional update on ``status = 'pending'`` so
        that of two concurrent completions only one succeeds.
        """

        now = ensure_aware(now or utcnow())
        task = self.get_task(user, task_id)
        if task.is_completed:
            raise AlreadyCompletedError("Task already completed", {"task_id": str(task.id)})

        result = self.db.execute(
            update(Task)
            .where(
                Task.id == task.id,
                Task.user_id == user.id,
                Task.status == TaskStatus.PENDING.value,
            )
            .values(status=TaskStatus.COMPLETED.value, completed_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise AlreadyCompletedError("Task already completed", {"task_id": str(task.id)})

        points = calculate_task_points(task.priority, task.type, task.deadline, now)
        self.db.execute(
            update(User)
            .where(User.id == user.id)
            .values(points=User.points + points)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(task)

        logger.info(
            "Task completed",
            user_id=str(user.id),
            task_id=str(task.id),
            points_earned=points,
        )

        new_achievements = AchievementService(self.db).check_achievements(user.id, now=now)
        self.db.refresh(user)
        invalidate_profile(user.id)

        return TaskCompletion(
            task=task,
            points_earned=points,
            total_points=user.points,
            new_achievements=new_achievements,
        )


__all__ = ["TaskCompletion", "TaskService", "resolve_anchor"]
