"""Value sets shared by the task model and the gamification rules."""
from __future__ import annotations

from enum import Enum


class TaskType(str, Enum):
    DAILY = "daily"
    DEADLINE = "deadline"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


__all__ = ["TaskPriority", "TaskStatus", "TaskType"]
