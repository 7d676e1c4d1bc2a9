"""Tests for the achievement service and endpoint."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy import select

from productiviflow.core.gamification import get_definition
from productiviflow.db.models import AchievementUnlock, Task, User
from productiviflow.schemas import TaskCreate
from productiviflow.services.achievement import AchievementService
from productiviflow.services.tasks import TaskService


NOW = datetime(2026, 6, 1, 10, 0, tzinfo=timezone.utc)


def register_and_login(client: TestClient, email: str, password: str = "securepass123") -> dict[str, str]:
    client.post(
        "/api/v1/auth/register", json={"email": email, "password": password, "name": "Planner"}
    )
    login_response = client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    return {"Authorization": f"Bearer {login_response.json()['access_token']}"}


def add_completed_tasks(db_session, user: User, section, count: int, *, early: bool = False) -> None:
    for index in range(count):
        db_session.add(
            Task(
                user_id=user.id,
                section_id=section.id,
                title=f"Done {index}",
                type="deadline" if early else "daily",
                target_date=None if early else NOW,
                deadline=NOW + timedelta(days=1) if early else None,
                status="completed",
                completed_at=NOW,
            )
        )
    db_session.commit()


def unlocked_keys(db_session, user: User) -> set[str]:
    return set(
        db_session.scalars(
            select(AchievementUnlock.achievement_key).where(AchievementUnlock.user_id == user.id)
        )
    )


def test_list_achievements_all_locked_for_new_user(client: TestClient) -> None:
    headers = register_and_login(client, "achievements-list@example.com")

    response = client.get("/api/v1/achievements", headers=headers)

    assert response.status_code == 200
    achievements = response.json()
    assert [item["id"] for item in achievements] == [
        "first_task",
        "tasks_10",
        "tasks_100",
        "streak_7",
        "points_1000",
        "early_10",
    ]
    assert all(item["unlocked"] is False for item in achievements)
    assert all(item["unlocked_at"] is None for item in achievements)
    assert achievements[0]["title"] == "First Steps"


def test_list_achievements_marks_unlocked(client: TestClient) -> None:
    headers = register_and_login(client, "achievements-unlocked@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    task_id = client.post(
        "/api/v1/tasks",
        json={"section_id": section_id, "title": "One", "type": "daily"},
        headers=headers,
    ).json()["id"]
    client.post(f"/api/v1/tasks/{task_id}/complete", headers=headers)

    achievements = {
        item["id"]: item for item in client.get("/api/v1/achievements", headers=headers).json()
    }

    assert achievements["first_task"]["unlocked"] is True
    assert achievements["first_task"]["unlocked_at"] is not None
    assert achievements["tasks_10"]["unlocked"] is False


def test_check_is_idempotent(db_session, make_user, make_section) -> None:
    user = make_user("achievements-idempotent@example.com")
    add_completed_tasks(db_session, user, make_section(user), 1)
    service = AchievementService(db_session)

    first = service.check_achievements(user.id, now=NOW)
    second = service.check_achievements(user.id, now=NOW)

    assert [item.definition.key for item in first] == ["first_task"]
    assert second == []
    db_session.refresh(user)
    assert user.points == 50


def test_streak_achievement_uses_stored_streak(db_session, make_user) -> None:
    user = make_user("achievements-streak@example.com", streak=7)

    unlocked = AchievementService(db_session).check_achievements(user.id, now=NOW)

    assert [item.definition.key for item in unlocked] == ["streak_7"]
    db_session.refresh(user)
    assert user.points == 200


def test_points_reward_counts_toward_later_thresholds(db_session, make_user) -> None:
    user = make_user("achievements-chain@example.com", points=900, streak=7)

    unlocked = AchievementService(db_session).check_achievements(user.id, now=NOW)

    # streak_7 lifts points to 1100 before points_1000 is evaluated
    assert [item.definition.key for item in unlocked] == ["streak_7", "points_1000"]
    db_session.refresh(user)
    assert user.points == 1400


def test_early_bird_unlocks_on_tenth_early_completion(db_session, make_user, make_section) -> None:
    user = make_user("achievements-early@example.com")
    section = make_section(user)
    service = TaskService(db_session)
    tasks = [
        service.create_task(
            user,
            TaskCreate(
                section_id=section.id,
                title=f"Early {index}",
                type="deadline",
                priority="low",
                deadline=NOW + timedelta(days=3),
            ),
            now=NOW,
        )
        for index in range(10)
    ]

    for task in tasks[:9]:
        service.complete_task(user, task.id, now=NOW)
    assert "early_10" not in unlocked_keys(db_session, user)

    completion = service.complete_task(user, tasks[9].id, now=NOW)

    keys = [item.definition.key for item in completion.new_achievements]
    assert "early_10" in keys
    assert "tasks_10" in keys
    assert completion.points_earned == 75


def test_points_milestone_from_single_completion(db_session, make_user, make_section) -> None:
    user = make_user("achievements-milestone@example.com", points=950)
    section = make_section(user)
    db_session.add(
        AchievementUnlock(user_id=user.id, achievement_key="first_task", unlocked_at=NOW)
    )
    db_session.commit()
    service = TaskService(db_session)
    task = service.create_task(
        user,
        TaskCreate(
            section_id=section.id,
            title="Big launch",
            type="deadline",
            priority="high",
            deadline=NOW + timedelta(hours=4),
        ),
        now=NOW,
    )

    completion = service.complete_task(user, task.id, now=NOW)

    assert completion.points_earned == 125
    assert [item.definition.key for item in completion.new_achievements] == ["points_1000"]
    assert completion.total_points == 950 + 125 + 300


def test_grant_skips_existing_unlock(db_session, make_user) -> None:
    user = make_user("achievements-race@example.com", points=10)
    db_session.add(
        AchievementUnlock(user_id=user.id, achievement_key="first_task", unlocked_at=NOW)
    )
    db_session.commit()

    granted = AchievementService(db_session)._grant(user.id, get_definition("first_task"), NOW)

    assert granted is False
    db_session.refresh(user)
    assert user.points == 10
    assert unlocked_keys(db_session, user) == {"first_task"}
