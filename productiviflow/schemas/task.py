"""Pydantic schemas for task endpoints."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from productiviflow.schemas.achievement import UnlockedAchievementRead

TaskTypeLiteral = Literal["daily", "deadline"]
TaskPriorityLiteral = Literal["low", "medium", "high"]
TaskStatusLiteral = Literal["pending", "completed"]

# Target date, deadline and subsection may be cleared with null; these may not
NON_NULLABLE_UPDATE_FIELDS = frozenset({"title", "type", "priority", "tags"})


def _dedupe_tags(tags: List[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


class TaskCreate(BaseModel):
    """Input for creating a task."""

    section_id: uuid.UUID
    subsection_id: Optional[uuid.UUID] = None
    title: str = Field(min_length=1, max_length=255)
    type: TaskTypeLiteral
    target_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    priority: TaskPriorityLiteral = "medium"
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: List[str]) -> List[str]:
        return _dedupe_tags(value)


class TaskUpdate(BaseModel):
    """Partial update for a task.

    Status and completion time are deliberately absent: completion goes
    through ``POST /tasks/{id}/complete`` so points and achievements stay
    consistent.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[TaskTypeLiteral] = None
    target_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    priority: Optional[TaskPriorityLiteral] = None
    tags: Optional[List[str]] = None
    subsection_id: Optional[uuid.UUID] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return None if value is None else _dedupe_tags(value)

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "TaskUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        for name in sorted(self.model_fields_set & NON_NULLABLE_UPDATE_FIELDS):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class TaskRead(BaseModel):
    """Task representation returned by the API."""

    id: uuid.UUID
    section_id: uuid.UUID
    subsection_id: Optional[uuid.UUID] = None
    title: str
    type: TaskTypeLiteral
    target_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    priority: TaskPriorityLiteral
    tags: List[str] = Field(default_factory=list)
    status: TaskStatusLiteral
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TaskWithSectionRead(TaskRead):
    """Task enriched with its section's display fields for day views."""

    section_name: Optional[str] = None
    section_icon: Optional[str] = None


class TaskCompletionResponse(BaseModel):
    """Result of completing a task."""

    task: TaskRead
    points_earned: int
    total_points: int
    new_achievements: List[UnlockedAchievementRead] = Field(default_factory=list)


__all__ = [
    "TaskCompletionResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TaskWithSectionRead",
]
