"""Pydantic schemas for sections and subsections."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from productiviflow.schemas.task import TaskRead


class SectionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=32)


class SectionUpdate(BaseModel):
    """Partial update for a section."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=32)
    order: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "SectionUpdate":
        if not any(value is not None for value in self.model_dump().values()):
            raise ValueError("At least one field must be provided")
        return self


class SubsectionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)


class SubsectionUpdate(BaseModel):
    """Partial update for a subsection."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    order: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "SubsectionUpdate":
        if not any(value is not None for value in self.model_dump().values()):
            raise ValueError("At least one field must be provided")
        return self


class SubsectionRead(BaseModel):
    id: uuid.UUID
    section_id: uuid.UUID
    title: str
    order: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SubsectionTree(SubsectionRead):
    """Subsection with its tasks and completion percentage."""

    tasks: List[TaskRead] = Field(default_factory=list)
    completion_percent: int = 0


class SectionRead(BaseModel):
    id: uuid.UUID
    title: str
    icon: str
    order: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SectionTree(SectionRead):
    """Section with subsections, direct tasks and subtree completion."""

    subsections: List[SubsectionTree] = Field(default_factory=list)
    tasks: List[TaskRead] = Field(default_factory=list)
    completion_percent: int = 0


__all__ = [
    "SectionCreate",
    "SectionRead",
    "SectionTree",
    "SectionUpdate",
    "SubsectionCreate",
    "SubsectionRead",
    "SubsectionTree",
    "SubsectionUpdate",
]
