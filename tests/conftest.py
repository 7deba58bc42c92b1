"""
pytest configuration and fixtures.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from database import get_session, init_db, make_engine
from main import app
from store import UserStore


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection in the test."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session) -> UserStore:
    return UserStore(session)


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    """Client whose requests use the in-memory database."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ann() -> dict:
    return {"name": "Ann", "email": "a@x.com", "password": "p"}
