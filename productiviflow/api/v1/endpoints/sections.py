"""Section and subsection endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status

from productiviflow.api import deps
from productiviflow.db.models.user import User
from productiviflow.schemas import (
    SectionCreate,
    SectionRead,
    SectionTree,
    SectionUpdate,
    SubsectionCreate,
    SubsectionRead,
    SubsectionTree,
    SubsectionUpdate,
)
from productiviflow.services.sections import SectionService

router = APIRouter(tags=["sections"])


@router.get("/sections", response_model=list[SectionTree])
def list_sections(
    *,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> list[SectionTree]:
    """Return all sections with subsections, tasks and completion percentages."""

    return service.list_tree(current_user)


@router.post("/sections", response_model=SectionTree, status_code=status.HTTP_201_CREATED)
def create_section(
    *,
    payload: SectionCreate,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> SectionTree:
    """Create an empty section at the end of the user's list."""

    section = service.create_section(current_user, payload)
    return SectionTree.model_validate(section)


@router.put("/sections/{section_id}", response_model=SectionRead)
def update_section(
    *,
    section_id: uuid.UUID,
    payload: SectionUpdate,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> SectionRead:
    return service.update_section(current_user, section_id, payload)


@router.delete("/sections/{section_id}")
def delete_section(
    *,
    section_id: uuid.UUID,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> dict[str, str]:
    """Delete a section with all its subsections and tasks."""

    service.delete_section(current_user, section_id)
    return {"message": "Section deleted"}


@router.post(
    "/sections/{section_id}/subsections",
    response_model=SubsectionTree,
    status_code=status.HTTP_201_CREATED,
)
def create_subsection(
    *,
    section_id: uuid.UUID,
    payload: SubsectionCreate,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> SubsectionTree:
    subsection = service.create_subsection(current_user, section_id, payload)
    return SubsectionTree.model_validate(subsection)


@router.put("/subsections/{subsection_id}", response_model=SubsectionRead)
def update_subsection(
    *,
    subsection_id: uuid.UUID,
    payload: SubsectionUpdate,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> SubsectionRead:
    return service.update_subsection(current_user, subsection_id, payload)


@router.delete("/subsections/{subsection_id}")
def delete_subsection(
    *,
    subsection_id: uuid.UUID,
    current_user: User = Depends(deps.get_current_user),
    service: SectionService = Depends(deps.get_section_service),
) -> dict[str, str]:
    """Delete a subsection and its tasks."""

    service.delete_subsection(current_user, subsection_id)
    return {"message": "Subsection deleted"}
