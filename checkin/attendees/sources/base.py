"""Attendee source contract.

An attendee source adapts one backing store of attendee-like rows to the
canonical AttendeeRecord. Sources are polymorphic over this contract and are
selected per event by the SourceResolver; callers never need to know which
source an attendee came from.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from checkin.attendees.errors import AttendeeNotFound, MalformedIdentifier, PersistenceFailure
from checkin.attendees.identifier import AttendeeIdentifier, SourceType, coerce
from checkin.attendees.record import AttendeeRecord
from checkin.attendees.stores import AttendeeRowStore
from checkin.models import Event, User

logger = logging.getLogger(__name__)


class AttendeeSource(ABC):
    """Capability contract implemented once per backing store."""

    source_type: SourceType

    @abstractmethod
    def supports(self, event: Event) -> bool:
        """Whether this source has attendees for the event. No side effects."""

    @abstractmethod
    def load_by_event(self, event: Event) -> Sequence[AttendeeRecord]:
        """All attendees of the event in source order."""

    @abstractmethod
    def load_by_identifier(
        self, event: Event, identifier: AttendeeIdentifier | str
    ) -> AttendeeRecord | None:
        """Point lookup; None when the identifier is not this source's."""

    @abstractmethod
    def check_in(self, identifier: AttendeeIdentifier | str, actor: User) -> AttendeeRecord:
        """Mark the attendee checked in. Idempotent."""

    @abstractmethod
    def undo_check_in(self, identifier: AttendeeIdentifier | str, actor: User) -> AttendeeRecord:
        """Clear the attendee's check-in. Idempotent."""

    @abstractmethod
    def count_by_event(self, event: Event) -> int:
        ...

    @abstractmethod
    def count_checked_in(self, event: Event) -> int:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} source_type={self.source_type.value!r}>"


class StoreBackedSource(AttendeeSource):
    """Attendee source over an AttendeeRowStore.

    Subclasses supply the source type, the support rule, and how a row maps
    to an AttendeeRecord. Reads only ever see confirmed rows; writes lock the
    row, apply the transition if it changes anything, and commit.
    """

    def __init__(self, store: AttendeeRowStore):
        self.store = store

    @abstractmethod
    def to_record(self, row) -> AttendeeRecord:
        ...

    def _owned_id(self, identifier: AttendeeIdentifier | str) -> int | None:
        try:
            identifier = coerce(identifier)
        except MalformedIdentifier:
            return None
        if identifier.source_type != self.source_type:
            return None
        return identifier.numeric_id

    def _is_attendee(self, row) -> bool:
        return row is not None and row.status == self.store.confirmed_status

    def load_by_event(self, event: Event) -> list[AttendeeRecord]:
        return [self.to_record(row) for row in self.store.load_all_by_event(event.id)]

    def load_by_identifier(self, event, identifier):
        row_id = self._owned_id(identifier)
        if row_id is None:
            return None
        row = self.store.load_by_id(row_id)
        if not self._is_attendee(row) or row.event_id != event.id:
            return None
        return self.to_record(row)

    def count_by_event(self, event: Event) -> int:
        return self.store.count_by_event(event.id)

    def count_checked_in(self, event: Event) -> int:
        return self.store.count_by_event(event.id, checked_in=True)

    def check_in(self, identifier, actor):
        return self._transition(identifier, actor, checked_in=True)

    def undo_check_in(self, identifier, actor):
        return self._transition(identifier, actor, checked_in=False)

    def _transition(self, identifier, actor: User, *, checked_in: bool) -> AttendeeRecord:
        row_id = self._owned_id(identifier)
        if row_id is None:
            raise AttendeeNotFound(f"{identifier} is not a {self.source_type.value} attendee")

        try:
            row = self.store.lock_for_update(row_id)
            if not self._is_attendee(row):
                self.store.rollback()
                raise AttendeeNotFound(f"No attendee {identifier}")

            if row.checked_in == checked_in:
                # Already in the requested state; keep the original actor and time
                record = self.to_record(row)
                self.store.rollback()
                return record

            row.checked_in = checked_in
            row.checked_in_at = datetime.now(UTC) if checked_in else None
            row.checked_in_by = actor.id if checked_in else None
            row = self.store.save(row)
        except SQLAlchemyError as e:
            self.store.rollback()
            raise PersistenceFailure(
                f"Failed to {'check in' if checked_in else 'undo check-in for'} {identifier}: {e}"
            ) from e

        logger.info(
            f"{'Checked in' if checked_in else 'Undid check-in for'} "
            f"{self.source_type.value}:{row_id} (event {row.event_id}) by user {actor.id}"
        )
        return self.to_record(row)
