"""User profile endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from productiviflow.api import deps
from productiviflow.config import settings
from productiviflow.db.models.user import User
from productiviflow.schemas import UserProfile, UserRead, UserUpdate
from productiviflow.services.stats import StatsService
from productiviflow.services.users import UserService
from productiviflow.utils.cache import PROFILE_NAMESPACE, cache_backend, profile_cache_key

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfile)
def read_current_user(
    current_user: User = Depends(deps.get_current_user),
    stats: StatsService = Depends(deps.get_stats_service),
) -> UserProfile:
    """Return the authenticated user's profile with completed and total task counts."""

    cache_key = profile_cache_key(current_user.id)
    cached = cache_backend.get(PROFILE_NAMESPACE, cache_key)
    if cached is not None:
        return cached

    counters = stats.user_stats(current_user)
    profile = UserProfile(
        **UserRead.model_validate(current_user).model_dump(),
        tasks_completed=counters["tasks_completed"],
        total_tasks=counters["total_tasks"],
    )
    payload = profile.model_dump(mode="json")
    cache_backend.set(
        PROFILE_NAMESPACE, cache_key, payload, ttl_seconds=settings.PROFILE_CACHE_TTL_SECONDS
    )
    return payload


@router.patch("/me", response_model=UserRead)
def update_current_user(
    payload: UserUpdate,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> UserRead:
    """Rename the authenticated user."""

    updated = UserService(db).update(current_user, payload)
    return UserRead.model_validate(updated)
