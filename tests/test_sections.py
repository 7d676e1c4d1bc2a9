"""Tests for section and subsection endpoints."""
from __future__ import annotations

import uuid

from fastapi.testclient import TestClient
from sqlalchemy import select

from productiviflow.db.models import Subsection, Task


def register_and_login(client: TestClient, email: str, password: str = "securepass123") -> dict[str, str]:
    client.post(
        "/api/v1/auth/register", json={"email": email, "password": password, "name": "Planner"}
    )
    login_response = client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    return {"Authorization": f"Bearer {login_response.json()['access_token']}"}


def add_task(client: TestClient, headers, section_id: str, subsection_id: str | None = None, *, done: bool = False) -> str:
    payload = {"section_id": section_id, "title": "Task", "type": "daily"}
    if subsection_id:
        payload["subsection_id"] = subsection_id
    task_id = client.post("/api/v1/tasks", json=payload, headers=headers).json()["id"]
    if done:
        assert client.post(f"/api/v1/tasks/{task_id}/complete", headers=headers).status_code == 200
    return task_id


def test_create_sections_assigns_order_and_default_icon(client: TestClient) -> None:
    headers = register_and_login(client, "sections-create@example.com")

    first = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers)
    second = client.post("/api/v1/sections", json={"title": "Home", "icon": "🏠"}, headers=headers)

    assert first.status_code == 201
    assert first.json()["icon"] == "📁"
    assert first.json()["order"] == 0
    assert first.json()["subsections"] == []
    assert first.json()["completion_percent"] == 0
    assert second.json()["icon"] == "🏠"
    assert second.json()["order"] == 1


def test_subsection_order_is_per_section(client: TestClient) -> None:
    headers = register_and_login(client, "sections-suborder@example.com")
    work = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    home = client.post("/api/v1/sections", json={"title": "Home"}, headers=headers).json()["id"]

    a = client.post(f"/api/v1/sections/{work}/subsections", json={"title": "A"}, headers=headers)
    b = client.post(f"/api/v1/sections/{work}/subsections", json={"title": "B"}, headers=headers)
    c = client.post(f"/api/v1/sections/{home}/subsections", json={"title": "C"}, headers=headers)

    assert a.status_code == 201
    assert [a.json()["order"], b.json()["order"], c.json()["order"]] == [0, 1, 0]
    assert a.json()["section_id"] == work
    assert a.json()["tasks"] == []


def test_tree_completion_percent_pools_subsection_tasks(client: TestClient) -> None:
    headers = register_and_login(client, "sections-tree@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    done_sub = client.post(
        f"/api/v1/sections/{section_id}/subsections", json={"title": "Done"}, headers=headers
    ).json()["id"]
    open_sub = client.post(
        f"/api/v1/sections/{section_id}/subsections", json={"title": "Open"}, headers=headers
    ).json()["id"]
    add_task(client, headers, section_id, done=True)
    add_task(client, headers, section_id, done_sub, done=True)
    add_task(client, headers, section_id, done_sub, done=True)
    add_task(client, headers, section_id, open_sub)

    response = client.get("/api/v1/sections", headers=headers)

    assert response.status_code == 200
    [section] = response.json()
    assert section["completion_percent"] == 75
    assert len(section["tasks"]) == 1
    by_title = {item["title"]: item for item in section["subsections"]}
    assert by_title["Done"]["completion_percent"] == 100
    assert len(by_title["Done"]["tasks"]) == 2
    assert by_title["Open"]["completion_percent"] == 0
    assert [item["title"] for item in section["subsections"]] == ["Done", "Open"]


def test_tree_only_lists_own_sections(client: TestClient) -> None:
    owner = register_and_login(client, "sections-mine@example.com")
    other = register_and_login(client, "sections-theirs@example.com")
    client.post("/api/v1/sections", json={"title": "Mine"}, headers=owner)

    assert client.get("/api/v1/sections", headers=other).json() == []


def test_update_section(client: TestClient) -> None:
    headers = register_and_login(client, "sections-update@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Wrok"}, headers=headers).json()["id"]

    response = client.put(
        f"/api/v1/sections/{section_id}", json={"title": "Work", "icon": "💼"}, headers=headers
    )
    empty = client.put(f"/api/v1/sections/{section_id}", json={}, headers=headers)

    assert response.status_code == 200
    assert response.json()["title"] == "Work"
    assert response.json()["icon"] == "💼"
    assert empty.status_code == 422
    assert empty.json()["message"] == "Validation failed"
    assert empty.json()["detail"][0]["type"] == "value_error"


def test_update_subsection(client: TestClient) -> None:
    headers = register_and_login(client, "sections-subupdate@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    subsection_id = client.post(
        f"/api/v1/sections/{section_id}/subsections", json={"title": "Calls"}, headers=headers
    ).json()["id"]

    response = client.put(
        f"/api/v1/subsections/{subsection_id}", json={"title": "Meetings"}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Meetings"


def test_delete_section_cascades(client: TestClient, db_session) -> None:
    headers = register_and_login(client, "sections-delete@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Old"}, headers=headers).json()["id"]
    subsection_id = client.post(
        f"/api/v1/sections/{section_id}/subsections", json={"title": "Older"}, headers=headers
    ).json()["id"]
    add_task(client, headers, section_id)
    add_task(client, headers, section_id, subsection_id)

    response = client.delete(f"/api/v1/sections/{section_id}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Section deleted"}
    section_uuid = uuid.UUID(section_id)
    assert db_session.scalars(select(Task).where(Task.section_id == section_uuid)).all() == []
    assert db_session.scalars(select(Subsection).where(Subsection.section_id == section_uuid)).all() == []
    assert client.get("/api/v1/sections", headers=headers).json() == []


def test_delete_subsection_keeps_direct_tasks(client: TestClient) -> None:
    headers = register_and_login(client, "sections-subdelete@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Work"}, headers=headers).json()["id"]
    subsection_id = client.post(
        f"/api/v1/sections/{section_id}/subsections", json={"title": "Gone"}, headers=headers
    ).json()["id"]
    direct_id = add_task(client, headers, section_id)
    add_task(client, headers, section_id, subsection_id)

    response = client.delete(f"/api/v1/subsections/{subsection_id}", headers=headers)

    assert response.status_code == 200
    [section] = client.get("/api/v1/sections", headers=headers).json()
    assert section["subsections"] == []
    assert [task["id"] for task in section["tasks"]] == [direct_id]


def test_sections_of_other_users_are_not_found(client: TestClient) -> None:
    owner = register_and_login(client, "sections-owner@example.com")
    intruder = register_and_login(client, "sections-intruder@example.com")
    section_id = client.post("/api/v1/sections", json={"title": "Private"}, headers=owner).json()["id"]
    subsection_id = client.post(
        f"/api/v1/sections/{section_id}/subsections", json={"title": "Hidden"}, headers=owner
    ).json()["id"]

    assert client.put(f"/api/v1/sections/{section_id}", json={"title": "X"}, headers=intruder).status_code == 404
    assert client.delete(f"/api/v1/sections/{section_id}", headers=intruder).status_code == 404
    assert (
        client.post(f"/api/v1/sections/{section_id}/subsections", json={"title": "Y"}, headers=intruder).status_code
        == 404
    )
    assert client.delete(f"/api/v1/subsections/{subsection_id}", headers=intruder).status_code == 404
    assert client.delete(f"/api/v1/sections/{uuid.uuid4()}", headers=owner).status_code == 404
