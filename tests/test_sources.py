"""Tests for the RSVP and ticket attendee sources."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlmodel import Session

from checkin.attendees.errors import AttendeeNotFound
from checkin.attendees.identifier import AttendeeIdentifier, SourceType
from checkin.attendees.sources import RsvpAttendeeSource, TicketAttendeeSource
from checkin.attendees.stores import RsvpStore, TicketStore
from checkin.models import Event, OrderAttendee, RsvpSubmission, User


@pytest.fixture(name="rsvp_source")
def rsvp_source_fixture(session: Session) -> RsvpAttendeeSource:
    return RsvpAttendeeSource(RsvpStore(session))


@pytest.fixture(name="ticket_source")
def ticket_source_fixture(session: Session) -> TicketAttendeeSource:
    return TicketAttendeeSource(TicketStore(session))


class TestRsvpAttendeeSource:
    """Tests for attendees backed by RSVP submissions."""

    def test_supports_rsvp_event(self, rsvp_source, rsvp_event: Event):
        assert rsvp_source.supports(rsvp_event) is True

    def test_supports_event_with_leftover_rsvps(
        self, rsvp_source, rsvp_event: Event, session: Session
    ):
        """An event that stopped taking RSVPs still lists existing ones."""
        rsvp_event.rsvp_enabled = False
        session.add(rsvp_event)
        session.commit()

        assert rsvp_source.supports(rsvp_event) is True

    def test_does_not_support_event_without_rsvps(
        self, rsvp_source, session: Session, owner: User
    ):
        event = Event(
            title="Paid Gala",
            owner_id=owner.id,
            start_time=datetime.now(UTC),
            rsvp_enabled=False,
            ticketing_enabled=True,
        )
        session.add(event)
        session.commit()

        assert rsvp_source.supports(event) is False

    def test_load_by_event_lists_confirmed_in_creation_order(self, rsvp_source, rsvp_event: Event):
        records = rsvp_source.load_by_event(rsvp_event)

        assert [str(r.identifier) for r in records] == ["rsvp:21", "rsvp:22"]
        assert records[0].display_name == "John Smith"
        assert records[0].email == "john@example.com"
        assert records[0].checked_in is False
        assert records[0].checked_in_at is None

    def test_load_by_event_is_restartable(self, rsvp_source, rsvp_event: Event):
        assert rsvp_source.load_by_event(rsvp_event) == rsvp_source.load_by_event(rsvp_event)

    def test_nameless_submission_falls_back_to_email(
        self, rsvp_source, rsvp_event: Event, session: Session
    ):
        session.add(RsvpSubmission(id=25, event_id=rsvp_event.id, email="legacy@example.com"))
        session.commit()

        record = rsvp_source.load_by_identifier(rsvp_event, "rsvp:25")
        assert record.display_name == "legacy@example.com"

    def test_load_by_identifier(self, rsvp_source, rsvp_event: Event):
        record = rsvp_source.load_by_identifier(rsvp_event, "rsvp:22")

        assert record is not None
        assert record.identifier == AttendeeIdentifier(SourceType.RSVP, 22)
        assert record.display_name == "Jane Doe"

    @pytest.mark.parametrize(
        "identifier",
        ["ticket:22", "rsvp:999", "rsvp:23", "rsvp:24", "garbage"],
    )
    def test_load_by_identifier_not_found(self, rsvp_source, rsvp_event: Event, identifier):
        """Other sources' ids, unknown ids and non-confirmed rows are not found."""
        assert rsvp_source.load_by_identifier(rsvp_event, identifier) is None

    def test_load_by_identifier_other_event(
        self, rsvp_source, rsvp_event: Event, mixed_event: Event
    ):
        assert rsvp_source.load_by_identifier(mixed_event, "rsvp:21") is None

    def test_check_in_persists_state(
        self, rsvp_source, rsvp_event: Event, owner: User, session: Session
    ):
        record = rsvp_source.check_in("rsvp:21", owner)

        assert record.checked_in is True
        assert record.checked_in_at is not None
        assert record.checked_in_by == owner.id

        row = session.get(RsvpSubmission, 21)
        assert row.checked_in is True
        assert row.checked_in_at is not None
        assert row.checked_in_by == owner.id

    def test_check_in_is_idempotent(
        self, rsvp_source, rsvp_event: Event, owner: User, staff: User
    ):
        """A second check-in keeps the original time and actor."""
        first = rsvp_source.check_in("rsvp:21", owner)
        second = rsvp_source.check_in("rsvp:21", staff)

        assert second.checked_in is True
        assert second.checked_in_at == first.checked_in_at
        assert second.checked_in_by == owner.id

    def test_stale_session_keeps_first_actor(self, engine, mixed_event: Event, owner: User, staff: User):
        """A station holding an old copy of the row must not overwrite a newer check-in."""
        with Session(engine) as session_a, Session(engine) as session_b:
            station_a = RsvpAttendeeSource(RsvpStore(session_a))
            station_b = RsvpAttendeeSource(RsvpStore(session_b))

            stale = station_a.load_by_identifier(mixed_event, "rsvp:7")
            assert stale.checked_in is False

            first = station_b.check_in("rsvp:7", owner)
            second = station_a.check_in("rsvp:7", staff)

            assert second.checked_in is True
            assert second.checked_in_by == owner.id
            assert second.checked_in_at == first.checked_in_at

    def test_out_of_range_id_is_not_found(self, rsvp_source, mixed_event: Event, owner: User):
        assert rsvp_source.load_by_identifier(mixed_event, f"rsvp:{2**70}") is None
        with pytest.raises(AttendeeNotFound):
            rsvp_source.check_in(f"rsvp:{2**70}", owner)

    def test_undo_check_in_clears_state(
        self, rsvp_source, rsvp_event: Event, owner: User, session: Session
    ):
        rsvp_source.check_in("rsvp:21", owner)
        record = rsvp_source.undo_check_in("rsvp:21", owner)

        assert record.checked_in is False
        assert record.checked_in_at is None
        assert record.checked_in_by is None

        row = session.get(RsvpSubmission, 21)
        assert row.checked_in is False
        assert row.checked_in_at is None
        assert row.checked_in_by is None

    def test_undo_check_in_is_idempotent(self, rsvp_source, rsvp_event: Event, owner: User):
        record = rsvp_source.undo_check_in("rsvp:22", owner)
        assert record.checked_in is False

    @pytest.mark.parametrize("identifier", ["ticket:21", "rsvp:999", "rsvp:23"])
    def test_check_in_unknown_attendee(
        self, rsvp_source, rsvp_event: Event, owner: User, identifier
    ):
        with pytest.raises(AttendeeNotFound):
            rsvp_source.check_in(identifier, owner)

    def test_counts(self, rsvp_source, rsvp_event: Event, owner: User):
        rsvp_source.check_in("rsvp:22", owner)

        assert rsvp_source.count_by_event(rsvp_event) == 2
        assert rsvp_source.count_checked_in(rsvp_event) == 1


class TestTicketAttendeeSource:
    """Tests for attendees backed by paid order attendees."""

    def test_supports_ticketed_event(self, ticket_source, mixed_event: Event):
        assert ticket_source.supports(mixed_event) is True

    def test_does_not_support_rsvp_only_event(self, ticket_source, rsvp_event: Event):
        assert ticket_source.supports(rsvp_event) is False

    def test_load_by_event(self, ticket_source, mixed_event: Event):
        records = ticket_source.load_by_event(mixed_event)

        assert len(records) == 1
        assert str(records[0].identifier) == "ticket:3"
        assert records[0].display_name == "Alan Turing"
        assert records[0].ticket_code == "T-0003"

    def test_load_by_event_skips_cancelled_tickets(
        self, ticket_source, mixed_event: Event, session: Session
    ):
        session.add(OrderAttendee(
            id=4, event_id=mixed_event.id, name="Refunded Person", status="cancelled"
        ))
        session.commit()

        assert [str(r.identifier) for r in ticket_source.load_by_event(mixed_event)] == ["ticket:3"]

    def test_load_by_identifier_ignores_rsvp_ids(self, ticket_source, mixed_event: Event):
        assert ticket_source.load_by_identifier(mixed_event, "rsvp:3") is None
        assert ticket_source.load_by_identifier(mixed_event, "ticket:3") is not None

    def test_check_in_and_undo(
        self, ticket_source, mixed_event: Event, owner: User, session: Session
    ):
        before = datetime.now(UTC) - timedelta(seconds=1)
        record = ticket_source.check_in(AttendeeIdentifier(SourceType.TICKET, 3), owner)

        assert record.checked_in is True
        assert record.checked_in_at >= before

        record = ticket_source.undo_check_in("ticket:3", owner)
        assert record.checked_in is False
        assert session.get(OrderAttendee, 3).checked_in_at is None
