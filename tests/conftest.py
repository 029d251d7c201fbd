import os

# Must be set before app.config is imported anywhere
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers every table on Base.metadata
from app.db import Base, db_manager, get_db

pytest_plugins = [
    "tests.fixtures.domain_fixtures",
    "tests.fixtures.knowledge_fixtures",
    "tests.fixtures.scenario_fixtures",
    "tests.fixtures.session_fixtures",
]


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db_manager.override_engine(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    """Fresh schema per test; yields a session bound to the in-memory database."""
    Base.metadata.create_all(bind=engine)
    session = db_manager.session_factory()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """TestClient whose requests share the test session."""
    from app.main import create_app

    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
