"""Tests for dashboard stats, the month calendar and the weekly heatmap."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from fastapi.testclient import TestClient

from productiviflow.db.models import Task
from productiviflow.services.stats import StatsService


def register_and_login(client: TestClient, email: str, password: str = "securepass123") -> dict[str, str]:
    client.post(
        "/api/v1/auth/register", json={"email": email, "password": password, "name": "Planner"}
    )
    login_response = client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    return {"Authorization": f"Bearer {login_response.json()['access_token']}"}


def add_task(db_session, user, section, *, target=None, deadline=None, done=False) -> Task:
    task = Task(
        user_id=user.id,
        section_id=section.id,
        title="Task",
        type="deadline" if deadline else "daily",
        target_date=target,
        deadline=deadline,
        status="completed" if done else "pending",
        completed_at=datetime.now(timezone.utc) if done else None,
    )
    db_session.add(task)
    db_session.commit()
    return task


def test_stats_counts(client: TestClient) -> None:
    headers = register_and_login(client, "stats-counts@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    task_ids = [
        client.post(
            "/api/v1/tasks",
            json={"section_id": section_id, "title": f"T{i}", "type": "daily"},
            headers=headers,
        ).json()["id"]
        for i in range(3)
    ]
    client.post(f"/api/v1/tasks/{task_ids[0]}/complete", headers=headers)

    response = client.get("/api/v1/stats", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "points": 75 + 50,
        "streak": 0,
        "tasks_completed": 1,
        "total_tasks": 3,
    }


def test_calendar_groups_by_day_of_month(db_session, make_user, make_section) -> None:
    user = make_user("stats-calendar@example.com")
    section = make_section(user)
    add_task(db_session, user, section, target=datetime(2026, 3, 5, 8, tzinfo=timezone.utc), done=True)
    add_task(db_session, user, section, target=datetime(2026, 3, 5, 18, tzinfo=timezone.utc))
    add_task(db_session, user, section, deadline=datetime(2026, 3, 20, 12, tzinfo=timezone.utc))
    add_task(db_session, user, section, target=datetime(2026, 4, 1, 0, tzinfo=timezone.utc))
    add_task(db_session, user, section, target=datetime(2026, 2, 28, 23, 59, tzinfo=timezone.utc))

    buckets = StatsService(db_session).calendar_stats(user, 2026, 3)

    assert list(buckets) == [5, 20]
    assert (buckets[5].total, buckets[5].completed) == (2, 1)
    assert (buckets[20].total, buckets[20].completed) == (1, 0)


def test_calendar_endpoint(client: TestClient) -> None:
    headers = register_and_login(client, "stats-calendar-api@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    client.post(
        "/api/v1/tasks",
        json={
            "section_id": section_id,
            "title": "Taxes",
            "type": "deadline",
            "deadline": "2026-03-20T12:00:00+00:00",
        },
        headers=headers,
    )

    response = client.get("/api/v1/tasks/calendar/2026/3", headers=headers)
    invalid = client.get("/api/v1/tasks/calendar/2026/13", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"20": {"total": 1, "completed": 0}}
    assert invalid.status_code == 422


def test_weekly_heatmap(db_session, make_user, make_section) -> None:
    now = datetime(2026, 5, 14, 15, 0, tzinfo=timezone.utc)
    user = make_user("stats-weekly@example.com")
    section = make_section(user)
    add_task(db_session, user, section, target=now - timedelta(hours=3), done=True)
    add_task(db_session, user, section, target=now - timedelta(hours=1))
    add_task(db_session, user, section, target=now - timedelta(days=6), done=True)
    add_task(db_session, user, section, target=now - timedelta(days=7), done=True)

    summaries = StatsService(db_session).weekly_heatmap(user, now=now)

    assert [item.date for item in summaries][0] == date(2026, 5, 8)
    assert [item.date for item in summaries][-1] == date(2026, 5, 14)
    assert len(summaries) == 7
    assert (summaries[-1].total, summaries[-1].completed, summaries[-1].percent) == (2, 1, 50)
    assert (summaries[0].total, summaries[0].percent) == (1, 100)
    assert sum(item.total for item in summaries) == 3


def test_weekly_endpoint_ends_today(client: TestClient) -> None:
    headers = register_and_login(client, "stats-weekly-api@example.com")

    response = client.get("/api/v1/stats/weekly", headers=headers)

    assert response.status_code == 200
    days = response.json()
    assert len(days) == 7
    assert days[-1]["date"] == datetime.now(timezone.utc).date().isoformat()
    assert all(day["percent"] == 0 for day in days)
