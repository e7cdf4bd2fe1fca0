"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from packwise.checklist.persistence import SnapshotWriter
from packwise.checklist.vault import Vault, get_vault
from packwise.core.database import get_session
from packwise.main import app
from packwise.models import Condition, JourneyArchetype, PackingSession


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="writer")
def writer_fixture() -> SnapshotWriter:
    """A snapshot writer private to the test."""
    return SnapshotWriter()


@pytest.fixture(name="vault")
def vault_fixture(writer: SnapshotWriter) -> Vault:
    """A fresh vault seeded with the built-in conditions."""
    return Vault.from_documents({}, writer)


@pytest.fixture(name="client")
def client_fixture(vault: Vault, session: Session):
    """Create a test client bound to the test vault and database session."""

    def get_vault_override():
        return vault

    def get_session_override():
        return session

    app.dependency_overrides[get_vault] = get_vault_override
    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="condition_named")
def condition_named_fixture(vault: Vault):
    """Look up a built-in condition by name."""

    def lookup(name: str) -> Condition:
        return next(c for c in vault.store.conditions if c.name == name)

    return lookup


@pytest.fixture(name="alpine_session")
def alpine_session_fixture(vault: Vault) -> PackingSession:
    """An Alpine Ascent session with no conditions active."""
    return vault.create_session(
        "Dolomites Hut Trek",
        JourneyArchetype.alpine_ascent,
        datetime.now(UTC) + timedelta(days=3),
    )


@pytest.fixture(name="archived_session")
def archived_session_fixture(vault: Vault) -> PackingSession:
    """An archived City Explorer session."""
    session = vault.create_session(
        "Lisbon Weekend",
        JourneyArchetype.urban_explorer,
        datetime.now(UTC) - timedelta(days=7),
    )
    vault.archive_session(session.id)
    return session
