"""Celery tasks package."""

from productiviflow.tasks import achievements

__all__ = ["achievements"]
