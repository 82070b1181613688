"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from checkin.attendees.registry import build_coordinator
from checkin.core.config import Settings
from checkin.core.database import get_session
from checkin.main import app
from checkin.models import Event, OrderAttendee, RsvpSubmission, User


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


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="owner")
def owner_fixture(session: Session) -> User:
    """The organiser who owns the test events."""
    user = User(id=1, name="Grace Hopper", email="grace@example.com")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="staff")
def staff_fixture(session: Session) -> User:
    """A second user who does not own any event."""
    user = User(id=2, name="Door Staff", email="door@example.com")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="mixed_event")
def mixed_event_fixture(session: Session, owner: User) -> Event:
    """An event with one RSVP (rsvp:7) and one ticket holder (ticket:3)."""
    event = Event(
        id=1,
        title="Computing Pioneers Meetup",
        owner_id=owner.id,
        start_time=datetime.now(UTC) + timedelta(days=1),
        rsvp_enabled=True,
        ticketing_enabled=True,
    )
    session.add(event)
    session.flush()

    session.add(RsvpSubmission(
        id=7,
        event_id=event.id,
        attendee_name="Ada Lovelace",
        email="ada@example.com",
    ))
    session.add(OrderAttendee(
        id=3,
        event_id=event.id,
        name="Alan Turing",
        email="alan@example.com",
        ticket_code="T-0003",
    ))
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="rsvp_event")
def rsvp_event_fixture(session: Session, owner: User) -> Event:
    """An RSVP-only event, including rows that are not attendees."""
    event = Event(
        id=2,
        title="Book Club",
        owner_id=owner.id,
        start_time=datetime.now(UTC) + timedelta(days=3),
        rsvp_enabled=True,
        ticketing_enabled=False,
    )
    session.add(event)
    session.flush()

    session.add(RsvpSubmission(id=21, event_id=event.id, attendee_name="John Smith", email="john@example.com"))
    session.add(RsvpSubmission(id=22, event_id=event.id, attendee_name="Jane Doe", email="jane@sample.org"))
    session.add(RsvpSubmission(
        id=23, event_id=event.id, attendee_name="Wally Waitlist", email="wally@example.com", status="waitlist"
    ))
    session.add(RsvpSubmission(
        id=24, event_id=event.id, attendee_name="Carl Cancelled", email="carl@example.com", status="cancelled"
    ))
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return Settings(rsvp_source_enabled=True, ticket_source_enabled=True)


@pytest.fixture(name="coordinator")
def coordinator_fixture(session: Session, settings: Settings):
    """Coordinator wired onto the test session."""
    return build_coordinator(session, settings)
