"""Pydantic models for stats and calendar endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class UserStats(BaseModel):
    """Headline numbers for the dashboard."""

    points: int
    streak: int
    tasks_completed: int
    total_tasks: int


class CalendarDayStats(BaseModel):
    """Task totals for one day of a month."""

    total: int
    completed: int


class WeeklyDay(BaseModel):
    """One day of the trailing-week heatmap."""

    date: date
    total: int
    completed: int
    percent: int
