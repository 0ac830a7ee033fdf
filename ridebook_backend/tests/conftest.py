import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.db import create_db_engine, get_db, init_db
from src.api.main import app
from src.api.seed import load_sample_data


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with the full schema and foreign keys enforced."""
    db_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_db(db):
    """Session over a database loaded with the sample dataset."""
    load_sample_data(db)
    return db


@pytest.fixture
def client(session_factory):
    """TestClient whose get_db dependency uses the in-memory database."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
