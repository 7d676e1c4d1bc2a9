"""API endpoint modules for v1."""

from productiviflow.api.v1.endpoints import (
    achievements,
    auth,
    sections,
    stats,
    tasks,
    users,
)

__all__ = [
    "achievements",
    "auth",
    "sections",
    "stats",
    "tasks",
    "users",
]
