"""API router for version 1."""
from fastapi import APIRouter

from productiviflow.api.v1.endpoints import (
    achievements,
    auth,
    sections,
    stats,
    tasks,
    users,
)


api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(sections.router)
api_router.include_router(tasks.router)
api_router.include_router(achievements.router)
api_router.include_router(stats.router)
