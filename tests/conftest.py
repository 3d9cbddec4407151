"""Pytest configuration and fixtures."""

import os

# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite locally
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
# The app reads its connection string at import time
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from registration.api.dependencies import get_user_repository  # noqa: E402
from registration.database import Base, get_db  # noqa: E402
from registration.main import app  # noqa: E402
from registration.repositories.mock import MockUserRepository  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

JEAN = {
    "name": "Jean",
    "lastname": "Dupont",
    "mail": "jean@example.com",
    "password": "hunter22",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function")
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_repository():
    """Empty in-memory user repository."""
    return MockUserRepository()


@pytest.fixture(scope="function")
def mock_client(mock_repository):
    """Create a test client whose user repository lives in memory."""
    app.dependency_overrides[get_user_repository] = lambda: mock_repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def new_user_payload():
    """A valid registration payload."""
    return dict(JEAN)


@pytest.fixture
def registered_user(client, new_user_payload):
    """Register a user through the API and return the response body."""
    response = client.post("/api/users", json=new_user_payload)
    assert response.status_code == 201
    return response.json()
