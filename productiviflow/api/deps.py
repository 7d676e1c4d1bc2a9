"""Shared API dependencies."""
from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from productiviflow.config import settings
from productiviflow.core.security import ACCESS_TOKEN_TYPE, InvalidTokenError, decode_token
from productiviflow.db.models.user import User
from productiviflow.db.session import get_db
from productiviflow.schemas import TokenPayload
from productiviflow.services.achievement import AchievementService
from productiviflow.services.sections import SectionService
from productiviflow.services.stats import StatsService
from productiviflow.services.tasks import TaskService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the Authorization header."""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = decode_token(token)
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError("Token must be an access token")
        token_data = TokenPayload.model_validate(payload)
    except (InvalidTokenError, ValidationError, ValueError, KeyError) as exc:
        raise credentials_exception from exc

    user = db.get(User, uuid.UUID(str(token_data.sub)))
    if not user:
        raise credentials_exception
    return user


def get_section_service(db: Session = Depends(get_db)) -> SectionService:
    return SectionService(db)


def get_task_service(
    db: Session = Depends(get_db),
    section_service: SectionService = Depends(get_section_service),
) -> TaskService:
    return TaskService(db, section_service=section_service)


def get_achievement_service(db: Session = Depends(get_db)) -> AchievementService:
    return AchievementService(db)


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(db)


__all__ = [
    "get_achievement_service",
    "get_current_user",
    "get_db",
    "get_section_service",
    "get_stats_service",
    "get_task_service",
    "oauth2_scheme",
]
