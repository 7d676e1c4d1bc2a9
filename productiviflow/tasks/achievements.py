"""Celery tasks that re-run the achievement check outside a request."""
from __future__ import annotations

from uuid import UUID

from loguru import logger
from sqlalchemy import select

from productiviflow.celery_app import celery_app
from productiviflow.db.models.user import User
from productiviflow.db.session import SessionLocal
from productiviflow.services.achievement import AchievementService
from productiviflow.utils.exceptions import NotFoundError


@celery_app.task(name="productiviflow.tasks.achievements.check_user_achievements")
def check_user_achievements(user_id: str) -> dict[str, int | list[str] | str]:
    """Check and unlock achievements for a specific user."""

    db = SessionLocal()
    try:
        try:
            user_uuid = UUID(str(user_id))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid user ID: {user_id}") from exc

        try:
            newly_unlocked = AchievementService(db).check_achievements(user_uuid)
        except NotFoundError as exc:
            raise ValueError(f"User {user_id} not found") from exc

        logger.info(
            "User achievement check completed",
            user_id=str(user_uuid),
            unlocked_count=len(newly_unlocked),
        )

        return {
            "user_id": str(user_uuid),
            "newly_unlocked": len(newly_unlocked),
            "achievement_keys": [item.definition.key for item in newly_unlocked],
        }

    except Exception as exc:  # pragma: no cover - logged and re-raised
        logger.error("Achievement check failed", user_id=str(user_id), error=str(exc))
        raise
    finally:
        db.close()


@celery_app.task(name="productiviflow.tasks.achievements.check_all_achievements")
def check_all_achievements() -> dict[str, int]:
    """Check achievements for every user (periodic task).

    A failure for one user is logged and counted; the sweep continues with
    the next user.
    """

    db = SessionLocal()
    try:
        user_ids = db.scalars(select(User.id).order_by(User.created_at)).all()

        total_checked = 0
        total_unlocked = 0
        failures = 0

        for user_id in user_ids:
            try:
                newly_unlocked = AchievementService(db).check_achievements(user_id)
            except Exception as exc:
                db.rollback()
                failures += 1
                logger.error(
                    "Achievement check failed for user",
                    user_id=str(user_id),
                    error=str(exc),
                )
                continue

            total_checked += 1
            total_unlocked += len(newly_unlocked)

            if total_checked % 100 == 0:
                logger.info(
                    "Achievement check progress",
                    checked=total_checked,
                    total=len(user_ids),
                )

        logger.info(
            "Bulk achievement check completed",
            users_checked=total_checked,
            total_unlocked=total_unlocked,
            failures=failures,
        )

        return {
            "users_checked": total_checked,
            "total_unlocked": total_unlocked,
            "failures": failures,
        }

    except Exception as exc:  # pragma: no cover - logged and re-raised
        logger.error("Bulk achievement check failed", error=str(exc))
        raise
    finally:
        db.close()
