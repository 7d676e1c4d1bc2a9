"""Service layer package."""

from productiviflow.services.achievement import AchievementService
from productiviflow.services.auth import AuthService
from productiviflow.services.sections import SectionService
from productiviflow.services.stats import StatsService
from productiviflow.services.tasks import TaskService
from productiviflow.services.users import UserService

__all__ = [
    "AchievementService",
    "AuthService",
    "SectionService",
    "StatsService",
    "TaskService",
    "UserService",
]
