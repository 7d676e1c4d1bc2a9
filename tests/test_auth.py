"""Integration tests for authentication endpoints."""
from __future__ import annotations

import uuid

from fastapi.testclient import TestClient


def test_user_registration_success(client: TestClient) -> None:
    payload = {
        "email": "Planner@Example.com",
        "password": "securepassword",
        "name": "Planner One",
    }

    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert uuid.UUID(data["id"])  # Valid UUID string
    assert data["email"] == "planner@example.com"
    assert data["name"] == "Planner One"
    assert data["points"] == 0
    assert data["streak"] == 0
    assert "hashed_password" not in data
    assert "password" not in data


def test_user_registration_duplicate_email(client: TestClient) -> None:
    payload = {
        "email": "duplicate@example.com",
        "password": "anothersecurepassword",
        "name": "Dup",
    }

    first_response = client.post("/api/v1/auth/register", json=payload)
    assert first_response.status_code == 201

    duplicate_response = client.post(
        "/api/v1/auth/register", json={**payload, "email": "DUPLICATE@example.com"}
    )
    assert duplicate_response.status_code == 400
    assert duplicate_response.json()["detail"] == "A user with this email already exists."


def test_user_registration_rejects_short_password(client: TestClient) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "short@example.com", "password": "short", "name": "Short"},
    )

    assert response.status_code == 422


def test_user_login_success(client: TestClient) -> None:
    registration_payload = {
        "email": "login@example.com",
        "password": "supersecure",
        "name": "Login",
    }
    client.post("/api/v1/auth/register", json=registration_payload)

    response = client.post(
        "/api/v1/auth/login", json={"email": "LOGIN@example.com", "password": "supersecure"}
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"


def test_user_login_invalid_credentials(client: TestClient) -> None:
    client.post(
        "/api/v1/auth/register",
        json={"email": "known@example.com", "password": "supersecure", "name": "Known"},
    )

    wrong_password = client.post(
        "/api/v1/auth/login", json={"email": "known@example.com", "password": "wrongpassword"}
    )
    unknown_user = client.post(
        "/api/v1/auth/login", json={"email": "unknown@example.com", "password": "wrongpassword"}
    )

    assert wrong_password.status_code == 401
    assert wrong_password.json()["detail"] == "Incorrect email or password"
    assert wrong_password.headers["www-authenticate"] == "Bearer"
    assert unknown_user.status_code == 401


def test_refresh_token_cannot_access_protected_routes(client: TestClient) -> None:
    client.post(
        "/api/v1/auth/register",
        json={"email": "refresh@example.com", "password": "supersecure", "name": "Refresh"},
    )
    tokens = client.post(
        "/api/v1/auth/login", json={"email": "refresh@example.com", "password": "supersecure"}
    ).json()

    response = client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )

    assert response.status_code == 401


def test_protected_route_requires_token(client: TestClient) -> None:
    response = client.get("/api/v1/sections")
    assert response.status_code == 401
