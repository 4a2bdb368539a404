"""Pytest fixtures and configuration for smartcalendar tests."""

import os

# Keep the module-level engine off the working directory.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from smartcalendar.database.database import Base
from smartcalendar.database import models  # noqa: F401
from smartcalendar.database.repository import TaskRepository
from smartcalendar.engine.scheduler import SchedulingConfig
from smartcalendar.models.task import Task, TaskKind, TaskPriority


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Day used by scheduling tests (workday 08:00-20:00)
TEST_DAY = datetime(2024, 1, 1)


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def workday_config():
    """Scheduling config for 2024-01-01, 08:00-20:00."""
    return SchedulingConfig.for_day(TEST_DAY.date())


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "name": "Test Task",
        "kind": TaskKind.FLEXIBLE,
        "priority": TaskPriority.MEDIUM,
        "duration_minutes": 30,
        "start_time": None,
        "end_time": None,
        "preferred_window": None,
        "frequency": None,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory fixture: build a Task from sample_task_base with overrides and a fresh id."""
    def _make(**overrides):
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def routine_task(sample_task_base):
    """Create a routine task."""
    return Task(**{**sample_task_base, "kind": TaskKind.ROUTINE, "frequency": "daily"})


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from smartcalendar.api.app import app
    from smartcalendar.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
