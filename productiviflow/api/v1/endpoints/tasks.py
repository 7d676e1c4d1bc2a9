"""Task endpoints, including completion and the calendar views."""
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Path, status

from productiviflow.api import deps
from productiviflow.db.models.user import User
from productiviflow.schemas import (
    CalendarDayStats,
    TaskCompletionResponse,
    TaskCreate,
    TaskRead,
    TaskUpdate,
    TaskWithSectionRead,
    UnlockedAchievementRead,
)
from productiviflow.services.stats import StatsService
from productiviflow.services.tasks import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    *,
    payload: TaskCreate,
    current_user: User = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
) -> TaskRead:
    """Create a task in a section, optionally inside one of its subsections."""

    return service.create_task(current_user, payload)


@router.get("/date/{day}", response_model=list[TaskWithSectionRead])
def list_tasks_for_day(
    *,
    day: date,
    current_user: User = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
) -> list[TaskWithSectionRead]:
    """Return tasks scheduled on ``day`` with their section's title and icon."""

    return [
        TaskWithSectionRead.model_validate(task).model_copy(
            update={
                "section_name": task.section.title if task.section else None,
                "section_icon": task.section.icon if task.section else None,
            }
        )
        for task in service.tasks_for_day(current_user, day)
    ]


@router.get("/calendar/{year}/{month}", response_model=dict[int, CalendarDayStats])
def read_calendar(
    *,
    year: int = Path(..., ge=1970, le=9999),
    month: int = Path(..., ge=1, le=12),
    current_user: User = Depends(deps.get_current_user),
    service: StatsService = Depends(deps.get_stats_service),
) -> dict[int, CalendarDayStats]:
    """Return per-day task totals and completions for one month."""

    buckets = service.calendar_stats(current_user, year, month)
    return {
        day: CalendarDayStats(total=bucket.total, completed=bucket.completed)
        for day, bucket in buckets.items()
    }


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    *,
    task_id: uuid.UUID,
    payload: TaskUpdate,
    current_user: User = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
) -> TaskRead:
    """Edit task fields. Completion is only possible through ``/complete``."""

    return service.update_task(current_user, task_id, payload)


@router.post("/{task_id}/complete", response_model=TaskCompletionResponse)
def complete_task(
    *,
    task_id: uuid.UUID,
    current_user: User = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
) -> TaskCompletionResponse:
    """Complete a pending task and report points and new achievements."""

    completion = service.complete_task(current_user, task_id)
    return TaskCompletionResponse(
        task=TaskRead.model_validate(completion.task),
        points_earned=completion.points_earned,
        total_points=completion.total_points,
        new_achievements=[
            UnlockedAchievementRead(
                id=item.definition.key,
                title=item.definition.title,
                description=item.definition.description,
                icon=item.definition.icon,
                points=item.definition.points,
                unlocked_at=item.unlocked_at,
            )
            for item in completion.new_achievements
        ],
    )


@router.delete("/{task_id}")
def delete_task(
    *,
    task_id: uuid.UUID,
    current_user: User = Depends(deps.get_current_user),
    service: TaskService = Depends(deps.get_task_service),
) -> dict[str, str]:
    service.delete_task(current_user, task_id)
    return {"message": "Task deleted"}
