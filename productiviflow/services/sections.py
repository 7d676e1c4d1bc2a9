"""Sections, subsections and the completion tree shown on the dashboard."""
from __future__ import annotations

import uuid
from collections import defaultdict
from typing import List

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from productiviflow.core.gamification import aggregate, aggregate_section
from productiviflow.db.models.section import DEFAULT_SECTION_ICON, Section, Subsection
from productiviflow.db.models.task import Task
from productiviflow.db.models.user import User
from productiviflow.schemas.section import (
    SectionCreate,
    SectionTree,
    SectionUpdate,
    SubsectionCreate,
    SubsectionTree,
    SubsectionUpdate,
)
from productiviflow.schemas.task import TaskRead
from productiviflow.utils.cache import invalidate_profile
from productiviflow.utils.exceptions import NotFoundError


class SectionService:
    """Create, arrange and delete the section → subsection hierarchy."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_section(self, user: User, section_id: uuid.UUID) -> Section:
        section = self.db.scalar(
            select(Section).where(Section.id == section_id, Section.user_id == user.id)
        )
        if section is None:
            raise NotFoundError("Section not found", {"section_id": str(section_id)})
        return section

    def get_subsection(self, user: User, subsection_id: uuid.UUID) -> Subsection:
        subsection = self.db.scalar(
            select(Subsection).where(
                Subsection.id == subsection_id, Subsection.user_id == user.id
            )
        )
        if subsection is None:
            raise NotFoundError("Subsection not found", {"subsection_id": str(subsection_id)})
        return subsection

    def _next_order(self, column, *criteria) -> int:
        # Equals the sibling count unless earlier siblings were deleted
        highest = self.db.scalar(select(func.max(column)).where(*criteria))
        return 0 if highest is None else highest + 1

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------
    def list_tree(self, user: User) -> List[SectionTree]:
        """Return every section with nested subsections, tasks and percentages.

        Subsections are aggregated over their own tasks; sections over the
        union of their direct tasks and all subsection tasks.
        """

        sections = self.db.scalars(
            select(Section)
            .where(Section.user_id == user.id)
            .order_by(Section.order, Section.created_at)
        ).all()
        subsections = self.db.scalars(
            select(Subsection)
            .where(Subsection.user_id == user.id)
            .order_by(Subsection.order, Subsection.created_at)
        ).all()
        tasks = self.db.scalars(
            select(Task).where(Task.user_id == user.id).order_by(Task.created_at)
        ).all()

        subsections_by_section: dict[uuid.UUID, list[Subsection]] = defaultdict(list)
        for subsection in subsections:
            subsections_by_section[subsection.section_id].append(subsection)

        direct_tasks: dict[uuid.UUID, list[Task]] = defaultdict(list)
        subsection_tasks: dict[uuid.UUID, list[Task]] = defaultdict(list)
        for task in tasks:
            if task.subsection_id is None:
                direct_tasks[task.section_id].append(task)
            else:
                subsection_tasks[task.subsection_id].append(task)

        tree: List[SectionTree] = []
        for section in sections:
            children = subsections_by_section.get(section.id, [])
            child_nodes = [
                SubsectionTree(
                    id=child.id,
                    section_id=child.section_id,
                    title=child.title,
                    order=child.order,
                    created_at=child.created_at,
                    tasks=[TaskRead.model_validate(task) for task in subsection_tasks.get(child.id, [])],
                    completion_percent=aggregate(subsection_tasks.get(child.id, [])).completion_percent,
                )
                for child in children
            ]
            own_tasks = direct_tasks.get(section.id, [])
            summary = aggregate_section(
                own_tasks, (subsection_tasks.get(child.id, []) for child in children)
            )
            tree.append(
                SectionTree(
                    id=section.id,
                    title=section.title,
                    icon=section.icon,
                    order=section.order,
                    created_at=section.created_at,
                    subsections=child_nodes,
                    tasks=[TaskRead.model_validate(task) for task in own_tasks],
                    completion_percent=summary.completion_percent,
                )
            )
        return tree

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------
    def create_section(self, user: User, payload: SectionCreate) -> Section:
        section = Section(
            user_id=user.id,
            title=payload.title,
            icon=payload.icon or DEFAULT_SECTION_ICON,
            order=self._next_order(Section.order, Section.user_id == user.id),
        )
        self.db.add(section)
        self.db.commit()
        self.db.refresh(section)
        return section

    def update_section(self, user: User, section_id: uuid.UUID, payload: SectionUpdate) -> Section:
        section = self.get_section(user, section_id)
        for field, value in payload.model_dump(exclude_none=True).items():
            setattr(section, field, value)
        self.db.commit()
        self.db.refresh(section)
        return section

    def delete_section(self, user: User, section_id: uuid.UUID) -> None:
        """Delete a section together with its subsections and all their tasks."""

        section = self.get_section(user, section_id)
        removed = self.db.execute(delete(Task).where(Task.section_id == section.id)).rowcount
        self.db.execute(delete(Subsection).where(Subsection.section_id == section.id))
        self.db.execute(delete(Section).where(Section.id == section.id))
        self.db.commit()
        invalidate_profile(user.id)
        logger.info("Section deleted", section_id=str(section_id), tasks_removed=removed)

    # ------------------------------------------------------------------
    # Subsections
    # ------------------------------------------------------------------
    def create_subsection(
        self, user: User, section_id: uuid.UUID, payload: SubsectionCreate
    ) -> Subsection:
        section = self.get_section(user, section_id)
        subsection = Subsection(
            section_id=section.id,
            user_id=user.id,
            title=payload.title,
            order=self._next_order(Subsection.order, Subsection.section_id == section.id),
        )
        self.db.add(subsection)
        self.db.commit()
        self.db.refresh(subsection)
        return subsection

    def update_subsection(
        self, user: User, subsection_id: uuid.UUID, payload: SubsectionUpdate
    ) -> Subsection:
        subsection = self.get_subsection(user, subsection_id)
        for field, value in payload.model_dump(exclude_none=True).items():
            setattr(subsection, field, value)
        self.db.commit()
        self.db.refresh(subsection)
        return subsection

    def delete_subsection(self, user: User, subsection_id: uuid.UUID) -> None:
        """Delete a subsection and its tasks."""

        subsection = self.get_subsection(user, subsection_id)
        removed = self.db.execute(delete(Task).where(Task.subsection_id == subsection.id)).rowcount
        self.db.execute(delete(Subsection).where(Subsection.id == subsection.id))
        self.db.commit()
        invalidate_profile(user.id)
        logger.info("Subsection deleted", subsection_id=str(subsection_id), tasks_removed=removed)


__all__ = ["SectionService"]
