"""Shared test fixtures for the RFP Knowledge Base test suite."""

import os

# Settings are cached on first import, so configure before importing rfpkb
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rfpkb.database import get_db, init_db
from rfpkb.main import app
from rfpkb.models import Organization
from rfpkb.services.record_store import RecordStore
from rfpkb.services.storage import DocumentStorage, get_storage


@pytest.fixture
def engine():
    """In-memory SQLite database with the full schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session):
    return RecordStore(db_session)


@pytest.fixture
def org_ids(db_session):
    """Two organizations, returned as (acme_id, other_id)."""
    acme = Organization(name="Acme Engineering")
    other = Organization(name="Other Partners")
    db_session.add_all([acme, other])
    db_session.commit()
    return acme.id, other.id


@pytest.fixture
def storage(tmp_path):
    return DocumentStorage(tmp_path, "documents")


@pytest.fixture
def client(session_factory, storage):
    """TestClient wired to the in-memory database and a temporary bucket."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


def signup(client, email, org_name, password="correct-horse-battery"):
    """Sign up a new organization and return (auth headers, org id)."""
    response = client.post(
        "/api/signup",
        json={"email": email, "password": password, "orgName": org_name},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    headers = {"Authorization": f"Bearer {body['access_token']}"}
    return headers, body["organization"]["id"]


@pytest.fixture
def acme(client):
    return signup(client, "owner@acmecorp.com", "Acme Engineering")


@pytest.fixture
def rival(client):
    return signup(client, "owner@rivaldesign.com", "Rival Design")
