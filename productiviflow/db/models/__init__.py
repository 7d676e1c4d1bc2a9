"""Database models package."""
from productiviflow.db.models.user import User
from productiviflow.db.models.section import Section, Subsection
from productiviflow.db.models.task import Task
from productiviflow.db.models.achievement import AchievementUnlock

__all__ = [
    "User",
    "Section",
    "Subsection",
    "Task",
    "AchievementUnlock",
]
