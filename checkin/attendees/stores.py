"""Storage adapters for the tables the check-in desk reads and writes.

Each store wraps one SQLModel table behind the handful of queries the
attendee sources and the coordinator need. None of them commit on their own
except ``AttendeeRowStore.save``, which is the single write path for
check-in state.
"""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from checkin.models import Event, OrderAttendee, RsvpSubmission, User
from checkin.models.order_attendee import ATTENDEE_STATUS_CONFIRMED
from checkin.models.rsvp import RSVP_STATUS_CONFIRMED

RowT = TypeVar("RowT", RsvpSubmission, OrderAttendee)

# Largest id a 64-bit INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


def in_id_range(row_id: int) -> bool:
    return 0 < row_id <= MAX_ROW_ID


class AttendeeRowStore(Generic[RowT]):
    """Queries over a table of attendee-like rows keyed by ``event_id``."""

    model: type[RowT]
    confirmed_status: str

    def __init__(self, session: Session):
        self.session = session

    def _confirmed(self):
        return select(self.model).where(self.model.status == self.confirmed_status)

    def load_by_id(self, row_id: int) -> RowT | None:
        """Load a row regardless of event or status."""
        if not in_id_range(row_id):
            return None
        return self.session.get(self.model, row_id)

    def load_all_by_event(self, event_id: int) -> list[RowT]:
        """Confirmed rows for an event, oldest first."""
        statement = (
            self._confirmed()
            .where(self.model.event_id == event_id)
            .order_by(self.model.created_at, self.model.id)
        )
        return list(self.session.exec(statement).all())

    def has_any_for_event(self, event_id: int) -> bool:
        statement = self._confirmed().where(self.model.event_id == event_id).limit(1)
        return self.session.exec(statement).first() is not None

    def count_by_event(self, event_id: int, *, checked_in: bool | None = None) -> int:
        statement = (
            select(func.count())
            .select_from(self.model)
            .where(self.model.status == self.confirmed_status)
            .where(self.model.event_id == event_id)
        )
        if checked_in is not None:
            statement = statement.where(self.model.checked_in == checked_in)
        return self.session.exec(statement).one()

    def lock_for_update(self, row_id: int) -> RowT | None:
        """Re-read a row under a row lock, discarding any cached state.

        On PostgreSQL this is ``SELECT ... FOR UPDATE``; SQLite ignores the
        lock and serializes writers itself.
        """
        if not in_id_range(row_id):
            return None
        statement = (
            select(self.model)
            .where(self.model.id == row_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.exec(statement).first()

    def save(self, row: RowT) -> RowT:
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def rollback(self) -> None:
        self.session.rollback()


class RsvpStore(AttendeeRowStore[RsvpSubmission]):
    """RSVP submissions."""

    model = RsvpSubmission
    confirmed_status = RSVP_STATUS_CONFIRMED


class TicketStore(AttendeeRowStore[OrderAttendee]):
    """Attendees attached to paid order line items."""

    model = OrderAttendee
    confirmed_status = ATTENDEE_STATUS_CONFIRMED


class EventStore:
    def __init__(self, session: Session):
        self.session = session

    def get(self, event_id: int) -> Event | None:
        if not in_id_range(event_id):
            return None
        return self.session.get(Event, event_id)


class UserStore:
    """Actor lookup backed by the user table."""

    def __init__(self, session: Session):
        self.session = session

    def load_user(self, user_id: int) -> User | None:
        if not in_id_range(user_id):
            return None
        return self.session.get(User, user_id)
