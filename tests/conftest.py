"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Repositories and workflows are wired exactly as in main.py, against the test DB
    - Route tests reach workflows through dependency_overrides (lifespan never runs)

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so data written by one repository call is visible to the next
    - Record builders exposed as fixtures returning callables: tests override
      only the fields they care about
"""

import os
from datetime import timedelta
from uuid import uuid4

# Ensure tests never reach a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from todo_api.api.auth import generate_token
from todo_api.api.dependencies import get_task_workflow, get_user_workflow
from todo_api.core.domain_types import ActorRole, utc_now
from todo_api.db.base import Base
from todo_api.infrastructure.task_repository import SqlTaskRepository
from todo_api.infrastructure.user_repository import SqlUserRepository
from todo_api.main import app
from todo_api.services.task_workflows import TaskWorkflow
from todo_api.services.user_workflows import UserWorkflow
import todo_api.models  # noqa: F401

DESCRIPTION = "A description that is comfortably longer than fifty characters."


def _user_record(**overrides) -> dict:
    now = utc_now()
    record = {
        "id": str(uuid4()),
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "analytical-engine",
        "created_at": now,
        "updated_at": now,
    }
    record.update(overrides)
    return record


def _task_record(**overrides) -> dict:
    now = utc_now()
    record = {
        "id": str(uuid4()),
        "title": "Write the report",
        "description": DESCRIPTION,
        "status": "TODO",
        "assignee_id": str(uuid4()),
        "created_at": now,
        "updated_at": now,
    }
    record.update(overrides)
    return record


@pytest.fixture
def user_record():
    return _user_record


@pytest.fixture
def task_record():
    return _task_record


@pytest.fixture
def minutes_ago():
    """Timestamp n minutes in the past: distinct, ordered created_at values."""
    base = utc_now()
    return lambda n: base - timedelta(minutes=n)


# ─── Database ────────────────────────────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def user_repo(test_session_factory):
    return SqlUserRepository(test_session_factory)


@pytest.fixture
def task_repo(test_session_factory):
    return SqlTaskRepository(test_session_factory)


@pytest.fixture
def user_workflow(user_repo):
    return UserWorkflow(user_repo)


@pytest.fixture
def task_workflow(task_repo):
    return TaskWorkflow(task_repo)


# ─── HTTP ────────────────────────────────────────────────────────

@pytest.fixture
async def client(user_workflow, task_workflow):
    """FastAPI test client with workflow dependencies overridden."""
    app.dependency_overrides[get_user_workflow] = lambda: user_workflow
    app.dependency_overrides[get_task_workflow] = lambda: task_workflow
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def actor_id():
    return str(uuid4())


@pytest.fixture
def auth_headers(actor_id):
    token = generate_token(actor_id, "actor@example.com", ActorRole.ASSIGNEE)
    return {"Authorization": f"Bearer {token}"}
