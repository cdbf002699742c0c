"""
Shared fixtures for the users-api test suite.

The API is exercised against the in-memory repository; the SQL
repository runs against an in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from usersapi.application.users.user_service import UserService
from usersapi.core.config import Settings
from usersapi.infrastructure.database import create_schema
from usersapi.infrastructure.users.in_memory_repository import InMemoryUserRepository
from usersapi.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        db_host="localhost",
        db_port="5432",
        db_user="users",
        db_password="secret",
        db_name="users",
        rate_limit_enabled=False,
    )


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def client(settings: Settings, repository: InMemoryUserRepository) -> TestClient:
    app = create_app(settings, UserService(repository))
    return TestClient(app)
