"""Static achievement catalog and its unlock predicates.

Each achievement is decided by a pure predicate over an
:class:`AchievementSnapshot`, so the catalog never talks to the database and
every rule can be checked in isolation. All predicates are monotonic in the
snapshot values: once satisfied they stay satisfied.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class AchievementKind(str, Enum):
    FIRST_TASK = "first_task"
    TASKS_10 = "tasks_10"
    TASKS_100 = "tasks_100"
    STREAK_7 = "streak_7"
    POINTS_1000 = "points_1000"
    EARLY_10 = "early_10"


@dataclass(frozen=True, slots=True)
class AchievementSnapshot:
    """Aggregate user state the predicates are evaluated against."""

    completed_tasks: int
    early_completions: int
    streak: int
    points: int


@dataclass(frozen=True, slots=True)
class AchievementDefinition:
    """Catalog entry: display metadata, reward and unlock rule."""

    kind: AchievementKind
    title: str
    description: str
    icon: str
    points: int
    predicate: Callable[[AchievementSnapshot], bool]

    @property
    def key(self) -> str:
        return self.kind.value

    def is_satisfied(self, snapshot: AchievementSnapshot) -> bool:
        return self.predicate(snapshot)


def completed_at_least(count: int) -> Callable[[AchievementSnapshot], bool]:
    return lambda snapshot: snapshot.completed_tasks >= count


def streak_at_least(days: int) -> Callable[[AchievementSnapshot], bool]:
    return lambda snapshot: snapshot.streak >= days


def points_at_least(points: int) -> Callable[[AchievementSnapshot], bool]:
    return lambda snapshot: snapshot.points >= points


def early_at_least(count: int) -> Callable[[AchievementSnapshot], bool]:
    return lambda snapshot: snapshot.early_completions >= count


# Evaluation order matters: rewards granted by earlier entries are visible to
# later predicates within the same check.
ACHIEVEMENT_CATALOG: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        kind=AchievementKind.FIRST_TASK,
        title="First Steps",
        description="Complete your first task",
        icon="🎯",
        points=50,
        predicate=completed_at_least(1),
    ),
    AchievementDefinition(
        kind=AchievementKind.TASKS_10,
        title="Getting Started",
        description="Complete 10 tasks",
        icon="🚀",
        points=100,
        predicate=completed_at_least(10),
    ),
    AchievementDefinition(
        kind=AchievementKind.TASKS_100,
        title="Centurion",
        description="Complete 100 tasks",
        icon="💯",
        points=500,
        predicate=completed_at_least(100),
    ),
    AchievementDefinition(
        kind=AchievementKind.STREAK_7,
        title="On Fire",
        description="7 day streak",
        icon="🔥",
        points=200,
        predicate=streak_at_least(7),
    ),
    AchievementDefinition(
        kind=AchievementKind.POINTS_1000,
        title="Point Master",
        description="Earn 1000 points",
        icon="⭐",
        points=300,
        predicate=points_at_least(1000),
    ),
    AchievementDefinition(
        kind=AchievementKind.EARLY_10,
        title="Early Bird",
        description="Complete 10 tasks before deadline",
        icon="🌅",
        points=150,
        predicate=early_at_least(10),
    ),
)

CATALOG_BY_KEY: dict[str, AchievementDefinition] = {
    definition.key: definition for definition in ACHIEVEMENT_CATALOG
}


def get_definition(key: str) -> AchievementDefinition:
    """Return the catalog entry for ``key`` or raise ``KeyError``."""

    return CATALOG_BY_KEY[key]


__all__ = [
    "ACHIEVEMENT_CATALOG",
    "AchievementDefinition",
    "AchievementKind",
    "AchievementSnapshot",
    "CATALOG_BY_KEY",
    "get_definition",
]
