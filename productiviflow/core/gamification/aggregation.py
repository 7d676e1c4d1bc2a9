"""Completion counts and per-day buckets over sets of tasks."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from .types import TaskStatus


class TaskLike(Protocol):
    status: str
    target_date: dt.datetime | None
    deadline: dt.datetime | None


@dataclass(frozen=True, slots=True)
class CompletionSummary:
    count: int
    completed_count: int
    completion_percent: int


@dataclass(slots=True)
class DayCount:
    total: int = 0
    completed: int = 0


@dataclass(frozen=True, slots=True)
class DaySummary:
    date: dt.date
    total: int
    completed: int
    percent: int


def completion_percent(completed: int, count: int) -> int:
    """Percentage of ``completed`` out of ``count``, rounded half up; 0 when empty."""

    if count <= 0:
        return 0
    # Integer form of floor(100 * completed / count + 0.5)
    return (200 * completed + count) // (2 * count)


def _is_completed(task: TaskLike) -> bool:
    return task.status == TaskStatus.COMPLETED.value


def aggregate(tasks: Iterable[TaskLike]) -> CompletionSummary:
    """Count tasks and completions and derive the completion percentage."""

    count = 0
    completed = 0
    for task in tasks:
        count += 1
        if _is_completed(task):
            completed += 1
    return CompletionSummary(
        count=count,
        completed_count=completed,
        completion_percent=completion_percent(completed, count),
    )


def aggregate_section(
    direct_tasks: Sequence[TaskLike], subsection_tasks: Iterable[Sequence[TaskLike]]
) -> CompletionSummary:
    """Aggregate a section over the union of its direct and subsection tasks.

    Children are pooled rather than averaged, so a subsection with one task
    weighs exactly one task.
    """
    pooled: list[TaskLike] = list(direct_tasks)
    for tasks in subsection_tasks:
        pooled.extend(tasks)
    return aggregate(pooled)


def anchor_of(task: TaskLike) -> dt.datetime | None:
    """Return the date a task is scheduled on, by target date or deadline."""

    return task.target_date or task.deadline


def bucket_by_day_of_month(
    tasks: Iterable[TaskLike], to_local_day
) -> dict[int, DayCount]:
    """Group tasks by the day of month of their anchor.

    ``to_local_day`` turns an anchor timestamp into a calendar date.
    """
    buckets: dict[int, DayCount] = {}
    for task in tasks:
        anchor = anchor_of(task)
        if anchor is None:
            continue
        day = to_local_day(anchor).day
        bucket = buckets.setdefault(day, DayCount())
        bucket.total += 1
        if _is_completed(task):
            bucket.completed += 1
    return dict(sorted(buckets.items()))


def summarize_days(
    tasks: Iterable[TaskLike], days: Sequence[dt.date], to_local_day
) -> list[DaySummary]:
    """Return one summary per entry of ``days``, in the given order."""

    counts = {day: DayCount() for day in days}
    for task in tasks:
        anchor = anchor_of(task)
        if anchor is None:
            continue
        bucket = counts.get(to_local_day(anchor))
        if bucket is None:
            continue
        bucket.total += 1
        if _is_completed(task):
            bucket.completed += 1

    return [
        DaySummary(
            date=day,
            total=counts[day].total,
            completed=counts[day].completed,
            percent=completion_percent(counts[day].completed, counts[day].total),
        )
        for day in days
    ]


def trailing_days(today: dt.date, length: int = 7) -> list[dt.date]:
    """Return ``length`` consecutive days ending with ``today``, oldest first."""

    return [today - dt.timedelta(days=offset) for offset in range(length - 1, -1, -1)]
