"""Celery worker and beat configuration."""
from __future__ import annotations

from typing import Optional

from celery import Celery
from celery.schedules import crontab
from pydantic import AnyUrl

from productiviflow.config import settings


def _or_redis(url: Optional[AnyUrl]) -> str:
    return str(url if url is not None else settings.REDIS_URL)


celery_app = Celery(
    "productiviflow",
    broker=_or_redis(settings.CELERY_BROKER_URL),
    backend=_or_redis(settings.CELERY_RESULT_BACKEND),
    include=["productiviflow.tasks.achievements"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    enable_utc=True,
    timezone=settings.TIMEZONE,
    # The nightly sweep walks every user; keep one task per worker slot
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_time_limit=30 * 60,
    task_soft_time_limit=25 * 60,
    result_expires=24 * 60 * 60,
)

celery_app.conf.beat_schedule = {
    # Catches unlocks missed when a completion's achievement pass failed
    "check-all-achievements": {
        "task": "productiviflow.tasks.achievements.check_all_achievements",
        "schedule": crontab(hour=3, minute=30),
    },
}

__all__ = ["celery_app"]
