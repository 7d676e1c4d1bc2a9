"""Pydantic schemas for achievement endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class AchievementRead(BaseModel):
    """Catalog entry together with the caller's unlock state."""

    id: str
    title: str
    description: str
    icon: str
    points: int
    unlocked: bool = False
    unlocked_at: datetime | None = None


class UnlockedAchievementRead(BaseModel):
    """Achievement granted during the current request."""

    id: str
    title: str
    description: str
    icon: str
    points: int
    unlocked_at: datetime


__all__ = ["AchievementRead", "UnlockedAchievementRead"]
