"""Pydantic models for user API interactions."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserBase(BaseModel):
    """Shared properties of user representations."""

    email: EmailStr
    name: str = Field(min_length=1, max_length=255)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserCreate(UserBase):
    """Schema for user registration input."""

    password: str = Field(min_length=8, max_length=128)


class UserLogin(BaseModel):
    """Schema for user login request."""

    email: EmailStr
    password: str


class UserRead(UserBase):
    """Profile returned by the API, including gamification counters."""

    id: uuid.UUID
    points: int
    streak: int
    last_active_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserProfile(UserRead):
    """Profile plus task counters, as shown on the account screen."""

    tasks_completed: int = 0
    total_tasks: int = 0


class UserUpdate(BaseModel):
    """Profile fields a user may change; points and streak are not among them."""

    name: str = Field(min_length=1, max_length=255)

    model_config = ConfigDict(extra="forbid")
