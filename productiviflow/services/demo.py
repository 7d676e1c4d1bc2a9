"""Demo content for local development and screenshots."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from productiviflow.db.models import AchievementUnlock, Section, Subsection, Task, User
from productiviflow.schemas import SectionCreate, SubsectionCreate, TaskCreate, UserCreate
from productiviflow.services.auth import AuthService
from productiviflow.services.sections import SectionService
from productiviflow.services.tasks import TaskService
from productiviflow.utils.dates import utcnow


@dataclass(frozen=True)
class DemoTask:
    title: str
    type: str
    offset_days: int
    priority: str
    tags: Sequence[str]
    done: bool = False


@dataclass(frozen=True)
class DemoSection:
    title: str
    icon: str
    # Subsection title -> tasks; the ``None`` key holds tasks filed directly on the section
    groups: dict[Optional[str], Sequence[DemoTask]]


@dataclass(frozen=True)
class DemoAccount:
    name: str
    email: str
    password: str
    streak: int = 0
    sections: Sequence[DemoSection] = ()


@dataclass
class SeedSummary:
    users: List[str] = field(default_factory=list)
    sections: int = 0
    subsections: int = 0
    tasks: int = 0
    completed: int = 0


DEMO_SECTIONS: tuple[DemoSection, ...] = (
    DemoSection(
        title="DSA Practice",
        icon="🧮",
        groups={
            "Arrays & Strings": (
                DemoTask("Two Sum Problem", "daily", 0, "high", ("leetcode", "easy"), done=True),
                DemoTask("Maximum Subarray", "deadline", 3, "medium", ("dp",)),
                DemoTask("Valid Anagram", "daily", 0, "low", ("strings",)),
            ),
            "Trees & Graphs": (
                DemoTask("Binary Tree Traversal", "daily", 0, "high", ("trees",)),
                DemoTask("Graph BFS/DFS", "deadline", 5, "high", ("graphs",)),
            ),
            "Dynamic Programming": (
                DemoTask("Climbing Stairs", "daily", 1, "medium", ("dp", "easy")),
                DemoTask("Coin Change Problem", "deadline", 7, "high", ("dp", "medium")),
            ),
        },
    ),
    DemoSection(
        title="Job Prep",
        icon="💼",
        groups={
            "System Design": (
                DemoTask("URL Shortener Design", "deadline", 5, "high", ("design",)),
                DemoTask("Design Twitter", "deadline", 7, "high", ("design",)),
            ),
            "Behavioral": (
                DemoTask("STAR Method Practice", "daily", 0, "medium", ("interview",), done=True),
                DemoTask("Mock Interview", "deadline", 3, "high", ("interview",)),
            ),
        },
    ),
    DemoSection(
        title="Subjects",
        icon="📚",
        groups={
            "Operating Systems": (
                DemoTask("Process Scheduling", "daily", 0, "medium", ("os",), done=True),
                DemoTask("Memory Management", "daily", 1, "high", ("os",)),
            ),
            "Computer Networks": (
                DemoTask("TCP/IP Model", "daily", 0, "medium", ("cn",)),
                DemoTask("OSI Layers", "deadline", 3, "medium", ("cn",)),
            ),
            "DBMS": (
                DemoTask("Normalization", "daily", 1, "medium", ("dbms",)),
            ),
        },
    ),
    DemoSection(
        title="Internship Tasks",
        icon="🏢",
        groups={
            None: (
                DemoTask("Complete API Documentation", "deadline", 3, "high", ("work",)),
                DemoTask("Code Review", "daily", 0, "medium", ("work",), done=True),
                DemoTask("Stand-up Meeting Notes", "daily", 0, "low", ("meeting",), done=True),
                DemoTask("Bug Fixes Sprint", "deadline", 5, "high", ("dev",)),
                DemoTask("Weekly Report", "deadline", 7, "medium", ("report",)),
            ),
        },
    ),
)

DEMO_ACCOUNTS: tuple[DemoAccount, ...] = (
    DemoAccount(
        name="Alex Demo",
        email="demo@example.com",
        password="demo1234",
        streak=12,
        sections=DEMO_SECTIONS,
    ),
    DemoAccount(name="Test User", email="test@example.com", password="test1234", streak=3),
)


class DemoSeeder:
    """Create the demo accounts through the regular services."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.auth = AuthService(db)
        self.sections = SectionService(db)
        self.tasks = TaskService(db, section_service=self.sections)

    def reset(self, accounts: Sequence[DemoAccount] = DEMO_ACCOUNTS) -> int:
        """Delete the demo accounts and everything they own."""

        emails = [account.email for account in accounts]
        user_ids = list(self.db.scalars(select(User.id).where(User.email.in_(emails))))
        if not user_ids:
            return 0

        for model in (AchievementUnlock, Task, Subsection, Section):
            self.db.execute(delete(model).where(model.user_id.in_(user_ids)))
        self.db.execute(delete(User).where(User.id.in_(user_ids)))
        self.db.commit()
        logger.info("Demo accounts removed", users=len(user_ids))
        return len(user_ids)

    def seed(
        self,
        accounts: Sequence[DemoAccount] = DEMO_ACCOUNTS,
        *,
        now: datetime | None = None,
    ) -> SeedSummary:
        now = now or utcnow()
        summary = SeedSummary()

        for account in accounts:
            user = self.auth.register_user(
                UserCreate(email=account.email, name=account.name, password=account.password)
            )
            # Streak before completions so streak achievements unlock on the first pass
            user.streak = account.streak
            self.db.commit()
            summary.users.append(user.email)

            for demo_section in account.sections:
                self._seed_section(user, demo_section, now, summary)

        logger.info(
            "Demo data seeded",
            users=len(summary.users),
            tasks=summary.tasks,
            completed=summary.completed,
        )
        return summary

    def _seed_section(
        self, user: User, demo: DemoSection, now: datetime, summary: SeedSummary
    ) -> None:
        section = self.sections.create_section(user, SectionCreate(title=demo.title, icon=demo.icon))
        summary.sections += 1

        for subsection_title, tasks in demo.groups.items():
            subsection_id = None
            if subsection_title is not None:
                subsection = self.sections.create_subsection(
                    user, section.id, SubsectionCreate(title=subsection_title)
                )
                subsection_id = subsection.id
                summary.subsections += 1

            for item in tasks:
                when = now + timedelta(days=item.offset_days)
                task = self.tasks.create_task(
                    user,
                    TaskCreate(
                        section_id=section.id,
                        subsection_id=subsection_id,
                        title=item.title,
                        type=item.type,
                        target_date=when if item.type == "daily" else None,
                        deadline=when if item.type == "deadline" else None,
                        priority=item.priority,
                        tags=list(item.tags),
                    ),
                    now=now,
                )
                summary.tasks += 1
                if item.done:
                    self.tasks.complete_task(user, task.id, now=now)
                    summary.completed += 1


__all__ = ["DEMO_ACCOUNTS", "DemoSeeder", "SeedSummary"]
