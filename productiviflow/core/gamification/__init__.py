"""Point, streak, achievement and aggregation rules."""

from .achievements import (
    ACHIEVEMENT_CATALOG,
    AchievementDefinition,
    AchievementKind,
    AchievementSnapshot,
    get_definition,
)
from .aggregation import (
    CompletionSummary,
    DayCount,
    DaySummary,
    aggregate,
    aggregate_section,
    bucket_by_day_of_month,
    completion_percent,
    summarize_days,
    trailing_days,
)
from .points import EARLY_COMPLETION_BONUS, calculate_task_points, is_early_completion
from .streak import next_streak
from .types import TaskPriority, TaskStatus, TaskType

__all__ = [
    "ACHIEVEMENT_CATALOG",
    "AchievementDefinition",
    "AchievementKind",
    "AchievementSnapshot",
    "CompletionSummary",
    "DayCount",
    "DaySummary",
    "EARLY_COMPLETION_BONUS",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "aggregate",
    "aggregate_section",
    "bucket_by_day_of_month",
    "calculate_task_points",
    "completion_percent",
    "get_definition",
    "is_early_completion",
    "next_streak",
    "summarize_days",
    "trailing_days",
]
