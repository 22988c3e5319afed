"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core.database import get_session, set_sqlite_pragma
from app.main import app
from app.models import Event, EventBeer, User
from app.tasting import lifecycle
from app.tasting.identity import Caller


def auth_headers(subject: str, nickname: str | None = None, email: str | None = None, scopes: str | None = None) -> dict:
    """Headers the identity proxy would forward for a signed-in user."""
    headers = {"X-Auth-Request-User": subject}
    if nickname:
        headers["X-Auth-Request-Preferred-Username"] = nickname
    if email:
        headers["X-Auth-Request-Email"] = email
    if scopes:
        headers["X-Auth-Request-Scopes"] = scopes
    return headers


def make_caller(session: Session, subject: str, nickname: str | None = None, is_admin: bool = False) -> Caller:
    """Insert a user row and wrap it as a resolved caller."""
    now = datetime.now(UTC)
    user = User(subject=subject, nickname=nickname or subject, created_utc=now, last_seen_utc=now)
    session.add(user)
    session.commit()
    session.refresh(user)
    return Caller(user=user, is_admin=is_admin)


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    sa_event.listen(engine, "connect", set_sqlite_pragma)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="alice")
def alice_fixture(session: Session) -> Caller:
    return make_caller(session, "sub-alice", "Alice")


@pytest.fixture(name="bob")
def bob_fixture(session: Session) -> Caller:
    return make_caller(session, "sub-bob", "Bob")


@pytest.fixture(name="carol")
def carol_fixture(session: Session) -> Caller:
    return make_caller(session, "sub-carol", "Carol")


@pytest.fixture(name="admin")
def admin_fixture(session: Session) -> Caller:
    return make_caller(session, "sub-admin", "Admin", is_admin=True)


@pytest.fixture(name="open_event")
def open_event_fixture(session: Session, alice: Caller) -> Event:
    """An OPEN private event owned by Alice."""
    return lifecycle.create_event(session, alice, name="Friday Tasting")


@pytest.fixture(name="beer")
def beer_fixture(session: Session, open_event: Event) -> EventBeer:
    """A beer logged at the open event."""
    beer = EventBeer(event_id=open_event.id, name="Pliny", brewery="Russian River", style="DIPA", abv=8.0)
    session.add(beer)
    session.commit()
    session.refresh(beer)
    return beer


@pytest.fixture(name="headers")
def headers_fixture():
    """Builder for identity proxy headers."""
    return auth_headers


@pytest.fixture(name="caller_factory")
def caller_factory_fixture(session: Session):
    """Builder for extra callers beyond the named ones."""

    def factory(subject: str, nickname: str | None = None, is_admin: bool = False) -> Caller:
        return make_caller(session, subject, nickname, is_admin)

    return factory
