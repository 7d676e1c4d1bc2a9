"""Dashboard counters, month calendar and trailing-week heatmap."""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import List

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from productiviflow.core.gamification import (
    DayCount,
    DaySummary,
    TaskStatus,
    bucket_by_day_of_month,
    summarize_days,
    trailing_days,
)
from productiviflow.db.models.task import Task
from productiviflow.db.models.user import User
from productiviflow.utils.dates import day_range, get_timezone, local_day, utcnow


class StatsService:
    """Read-only aggregates over a user's tasks."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _anchored_between(self, user_id, start: datetime, end: datetime) -> List[Task]:
        stmt = select(Task).where(
            Task.user_id == user_id,
            or_(
                and_(Task.target_date >= start, Task.target_date < end),
                and_(Task.deadline >= start, Task.deadline < end),
            ),
        )
        return list(self.db.scalars(stmt))

    def user_stats(self, user: User) -> dict[str, int]:
        """Return points, streak and task counters."""

        total, completed = self.db.execute(
            select(
                func.count(Task.id),
                func.count(Task.id).filter(Task.status == TaskStatus.COMPLETED.value),
            ).where(Task.user_id == user.id)
        ).one()
        return {
            "points": user.points or 0,
            "streak": user.streak or 0,
            "tasks_completed": completed or 0,
            "total_tasks": total or 0,
        }

    def calendar_stats(self, user: User, year: int, month: int) -> dict[int, DayCount]:
        """Per day-of-month totals for tasks anchored in the given month."""

        last_day = calendar.monthrange(year, month)[1]
        tz = get_timezone()
        start, end = day_range(date(year, month, 1), date(year, month, last_day), tz)
        tasks = self._anchored_between(user.id, start, end)
        return bucket_by_day_of_month(tasks, lambda value: local_day(value, tz))

    def weekly_heatmap(self, user: User, *, now: datetime | None = None) -> List[DaySummary]:
        """Seven daily summaries ending today, oldest first."""

        tz = get_timezone()
        days = trailing_days(local_day(now or utcnow(), tz))
        start, end = day_range(days[0], days[-1], tz)
        tasks = self._anchored_between(user.id, start, end)
        return summarize_days(tasks, days, lambda value: local_day(value, tz))


__all__ = ["StatsService"]
