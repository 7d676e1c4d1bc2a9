"""Pytest fixtures for API and service tests."""

import os
from collections.abc import Callable, Generator

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from productiviflow.api.deps import get_db
from productiviflow.db import models  # noqa: F401  # Imported for side effects
from productiviflow.db.base import Base
from productiviflow.db.models import AchievementUnlock, Section, Subsection, Task, User
from productiviflow.main import create_app
from productiviflow.utils.cache import cache_backend


TABLES = [
    User.__table__,
    Section.__table__,
    Subsection.__table__,
    Task.__table__,
    AchievementUnlock.__table__,
]


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        for model in (AchievementUnlock, Task, Subsection, Section, User):
            db.execute(delete(model))
        db.commit()
        db.close()


@pytest.fixture(autouse=True)
def clear_cache() -> Generator[None, None, None]:
    cache_backend.clear()
    try:
        yield
    finally:
        cache_backend.clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Insert a user directly, bypassing registration."""

    def factory(email: str, **fields) -> User:
        fields.setdefault("name", "Test User")
        user = User(email=email, hashed_password="not-a-real-hash", **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return factory


@pytest.fixture()
def make_section(db_session: Session) -> Callable[..., Section]:
    def factory(user: User, title: str = "Work", **fields) -> Section:
        section = Section(user_id=user.id, title=title, **fields)
        db_session.add(section)
        db_session.commit()
        db_session.refresh(section)
        return section

    return factory
