"""Point awards for completing a task."""
from __future__ import annotations

import datetime as dt

from .types import TaskPriority, TaskType

BASE_POINTS = {
    TaskPriority.LOW: 50,
    TaskPriority.MEDIUM: 75,
    TaskPriority.HIGH: 100,
}

# Awarded on top of the base when a deadline task is finished before its deadline
EARLY_COMPLETION_BONUS = 25


def base_points(priority: str) -> int:
    """Return the base award for a priority value."""

    return BASE_POINTS[TaskPriority(priority)]


def is_early_completion(task_type: str, deadline: dt.datetime | None, completed_at: dt.datetime) -> bool:
    """Whether a completion at ``completed_at`` beats the task deadline.

    Daily tasks never qualify, whatever their target date.
    """
    if TaskType(task_type) is not TaskType.DEADLINE or deadline is None:
        return False
    return completed_at < deadline


def calculate_task_points(
    priority: str,
    task_type: str,
    deadline: dt.datetime | None,
    completed_at: dt.datetime,
) -> int:
    """Return the points earned for completing a task at ``completed_at``."""

    points = base_points(priority)
    if is_early_completion(task_type, deadline, completed_at):
        points += EARLY_COMPLETION_BONUS
    return points
