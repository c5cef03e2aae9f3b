"""
Pytest configuration and fixtures for the test suite.
"""

import os
import uuid

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Set test environment variables before importing the app
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-32chars-minimum"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture
def db_path(tmp_path):
    """
    Fresh SQLite file with every table created.
    """
    from core.database import Base, import_models

    import_models()
    path = tmp_path / "projectnest.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def session_factory(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory


@pytest.fixture
def client(session_factory):
    """
    Create a test client for the FastAPI application bound to the test database.
    """
    from core.database import get_session
    from main import app

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def session(session_factory):
    """
    Async session for service-level tests.
    """
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(session):
    """
    Factory inserting an active user straight into the database.
    """
    from core.auth import hash_password
    from domain.user.models import User

    async def _make_user(name="Service User", email=None):
        user = User(
            name=name,
            email=email or f"{uuid.uuid4().hex[:8]}@example.com",
            password_hash=hash_password("password123"),
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def register_user(client):
    """
    Factory registering a user through the API and returning auth headers.
    """

    def _register(name="Test User", email=None, password="testpassword123"):
        response = client.post(
            "/api/auth/register",
            json={
                "name": name,
                "email": email or f"{uuid.uuid4().hex[:8]}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        token = response.json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def auth_headers(register_user):
    return register_user(name="Owner", email="owner@example.com")


@pytest.fixture
def other_headers(register_user):
    return register_user(name="Outsider", email="outsider@example.com")


@pytest.fixture
def create_project(client):
    """
    Factory creating a project via the API and returning its JSON.
    """

    def _create(headers, **fields):
        payload = {"name": "Website relaunch", **fields}
        response = client.post("/api/projects", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def project(create_project, auth_headers):
    return create_project(auth_headers)


@pytest.fixture
def create_list(client):
    def _create(headers, project_uid, **fields):
        payload = {"project_uid": project_uid, "name": "Backlog", **fields}
        response = client.post("/api/lists", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_task(client):
    def _create(headers, list_uid, **fields):
        payload = {"list_uid": list_uid, "title": "Write copy", **fields}
        response = client.post("/api/tasks", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
