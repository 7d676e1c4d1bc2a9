"""Dashboard statistics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from productiviflow.api import deps
from productiviflow.db.models.user import User
from productiviflow.schemas import UserStats, WeeklyDay
from productiviflow.services.stats import StatsService


router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=UserStats)
def read_stats(
    *,
    current_user: User = Depends(deps.get_current_user),
    service: StatsService = Depends(deps.get_stats_service),
) -> UserStats:
    """Return points, streak and task counters."""

    return UserStats(**service.user_stats(current_user))


@router.get("/weekly", response_model=list[WeeklyDay])
def read_weekly(
    *,
    current_user: User = Depends(deps.get_current_user),
    service: StatsService = Depends(deps.get_stats_service),
) -> list[WeeklyDay]:
    """Return completion per day for the last seven days, today included."""

    return [
        WeeklyDay(date=day.date, total=day.total, completed=day.completed, percent=day.percent)
        for day in service.weekly_heatmap(current_user)
    ]
