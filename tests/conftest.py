"""Shared pytest fixtures for Manager API test suites."""

from collections.abc import Generator
import os
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("MANAGER_DATABASE_URL", "sqlite://")


@pytest.fixture
def db_sessionmaker() -> Generator[sessionmaker, None, None]:
    """In-memory SQLite database shared across the threads of one test."""
    from manager_api.db.models import Base

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=Session)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def app(db_sessionmaker: sessionmaker):
    """Application with the database dependency pointed at SQLite."""
    from manager_api.db.base import get_db_session
    from manager_api.main import app as fastapi_app

    def _override_db_session() -> Generator[Session, None, None]:
        session = db_sessionmaker()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db_session] = _override_db_session
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Provide an API test client for contract suites."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header carrying a freshly issued bearer token."""
    from manager_api.core.config import get_auth_settings
    from manager_api.core.security import TokenGenerator

    issued = TokenGenerator(get_auth_settings()).generate_token("tests")
    return {"Authorization": f"Bearer {issued.token}"}
