from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.api.deps import get_db
from app.core.security import hash_password
from app.db.base import Base
from app.main import app
from app.models.enums import UserRole
from app.models.tasks import Project, Task
from app.models.users import User

PASSWORD = "secret-pass"


@pytest.fixture
def session_factory() -> Generator[sessionmaker, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    def _get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db: Session, username: str, role: UserRole, *, active: bool = True) -> User:
    user = User(
        username=username,
        password_hash=hash_password(PASSWORD),
        role=role.value,
        active=active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_task(db: Session, dataco_number: str, title: str | None = None) -> Task:
    project = db.execute(
        select(Project).where(Project.name == "Data Collection")
    ).scalar_one_or_none()
    if project is None:
        project = Project(name="Data Collection")
        db.add(project)
        db.flush()
    task = Task(
        project_id=project.id,
        title=title or f"Task {dataco_number}",
        dataco_number=dataco_number,
        target_car=["wstn"],
        day_time=["day"],
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def login(client: TestClient, username: str) -> None:
    resp = client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 200, resp.text


@pytest.fixture
def admin(db: Session) -> User:
    return make_user(db, "admin", UserRole.ADMIN)


@pytest.fixture
def admin_client(client: TestClient, admin: User) -> TestClient:
    login(client, admin.username)
    return client


@pytest.fixture
def task_factory(db: Session):
    def _make(dataco_number: str, title: str | None = None) -> Task:
        return make_task(db, dataco_number, title)

    return _make


@pytest.fixture
def user_factory(db: Session):
    def _make(username: str, role: UserRole, *, active: bool = True) -> User:
        return make_user(db, username, role, active=active)

    return _make


@pytest.fixture
def login_as(client: TestClient):
    def _login(username: str) -> TestClient:
        login(client, username)
        return client

    return _login
