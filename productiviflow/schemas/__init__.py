"""Pydantic schemas package."""

from productiviflow.schemas.achievement import AchievementRead, UnlockedAchievementRead
from productiviflow.schemas.auth import Token, TokenPayload
from productiviflow.schemas.section import (
    SectionCreate,
    SectionRead,
    SectionTree,
    SectionUpdate,
    SubsectionCreate,
    SubsectionRead,
    SubsectionTree,
    SubsectionUpdate,
)
from productiviflow.schemas.stats import CalendarDayStats, UserStats, WeeklyDay
from productiviflow.schemas.task import (
    TaskCompletionResponse,
    TaskCreate,
    TaskRead,
    TaskUpdate,
    TaskWithSectionRead,
)
from productiviflow.schemas.user import (
    UserBase,
    UserCreate,
    UserLogin,
    UserProfile,
    UserRead,
    UserUpdate,
)

__all__ = [
    "AchievementRead",
    "CalendarDayStats",
    "SectionCreate",
    "SectionRead",
    "SectionTree",
    "SectionUpdate",
    "SubsectionCreate",
    "SubsectionRead",
    "SubsectionTree",
    "SubsectionUpdate",
    "TaskCompletionResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TaskWithSectionRead",
    "Token",
    "TokenPayload",
    "UnlockedAchievementRead",
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserProfile",
    "UserRead",
    "UserStats",
    "UserUpdate",
    "WeeklyDay",
]
