"""Achievement catalog endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from productiviflow.api import deps
from productiviflow.db.models.user import User
from productiviflow.schemas import AchievementRead
from productiviflow.services.achievement import AchievementService

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("", response_model=list[AchievementRead])
def list_achievements(
    *,
    current_user: User = Depends(deps.get_current_user),
    service: AchievementService = Depends(deps.get_achievement_service),
) -> list[AchievementRead]:
    """Return every achievement with the caller's unlock state."""

    return [
        AchievementRead(
            id=item.definition.key,
            title=item.definition.title,
            description=item.definition.description,
            icon=item.definition.icon,
            points=item.definition.points,
            unlocked=item.unlocked,
            unlocked_at=item.unlocked_at,
        )
        for item in service.list_for_user(current_user.id)
    ]
