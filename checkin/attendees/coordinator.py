"""Check-in coordinator: the entry point used by the check-in routes.

Lists and searches an event's attendees across all of its sources, and
toggles check-in state for a single attendee. Toggling never raises: every
failure is logged and reported as a ToggleResult, because the check-in desk
UI treats a failed toggle as "nothing changed" and simply re-renders.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from checkin.attendees.errors import (
    ActorNotFound,
    AttendeeNotFound,
    EventNotFound,
    MalformedIdentifier,
    PersistenceFailure,
)
from checkin.attendees.identifier import AttendeeIdentifier, SourceType, make_identifier
from checkin.attendees.record import AttendeeView, CheckInStats
from checkin.attendees.resolver import SourceResolver
from checkin.attendees.stores import AttendeeRowStore, EventStore
from checkin.models import Event, User


class ActorLookup(Protocol):
    def load_user(self, user_id: int) -> User | None:
        ...


class ToggleStatus(StrEnum):
    TOGGLED = "toggled"
    MALFORMED_IDENTIFIER = "malformed_identifier"
    NOT_FOUND = "not_found"
    EVENT_NOT_FOUND = "event_not_found"
    ACTOR_MISSING = "actor_missing"
    PERSIST_ERROR = "persist_error"


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a toggle. ``checked_in`` is only meaningful when toggled."""

    status: ToggleStatus
    checked_in: bool = False

    @property
    def ok(self) -> bool:
        return self.status is ToggleStatus.TOGGLED


class CheckInCoordinator:
    def __init__(
        self,
        resolver: SourceResolver,
        events: EventStore,
        stores: Mapping[SourceType, AttendeeRowStore],
        actors: ActorLookup,
        logger: logging.Logger | None = None,
    ):
        self.resolver = resolver
        self.events = events
        self.stores = dict(stores)
        self.actors = actors
        self.logger = logger or logging.getLogger(__name__)

    def list_attendees(self, event: Event) -> list[AttendeeView]:
        repository = self.resolver.resolve(event)
        return [AttendeeView.from_record(record) for record in repository.load_by_event(event)]

    def search_attendees(self, event: Event, query: str) -> list[AttendeeView]:
        """Attendees whose name or email contains ``query``, ignoring case."""
        attendees = self.list_attendees(event)
        needle = (query or "").strip().casefold()
        if not needle:
            return attendees
        return [
            attendee
            for attendee in attendees
            if needle in attendee.name.casefold() or needle in attendee.email.casefold()
        ]

    def stats(self, event: Event) -> CheckInStats:
        repository = self.resolver.resolve(event)
        return CheckInStats(
            total=repository.count_by_event(event),
            checked_in=repository.count_checked_in(event),
        )

    def export_rows(self, event: Event) -> list[dict]:
        repository = self.resolver.resolve(event)
        return [record.to_export_row() for record in repository.load_by_event(event)]

    def _discover_event(self, identifier: AttendeeIdentifier) -> Event:
        """Find the event an attendee belongs to from the attendee row itself."""
        store = self.stores.get(identifier.source_type)
        row = store.load_by_id(identifier.numeric_id) if store else None
        if row is None:
            raise AttendeeNotFound(f"No attendee {identifier}")
        event = self.events.get(row.event_id)
        if event is None:
            raise EventNotFound(f"Attendee {identifier} references missing event {row.event_id}")
        return event

    def toggle(
        self,
        numeric_id: int,
        attendee_type: str,
        acting_user_id: int,
        *,
        event_id: int | None = None,
    ) -> ToggleResult:
        """Flip an attendee's check-in state.

        The event is discovered from the attendee row, since callers only
        know the bare id and type. When ``event_id`` is given, an attendee of
        any other event is reported as not found.
        """
        context = f"event={event_id} attendee={attendee_type}:{numeric_id} user={acting_user_id}"
        try:
            identifier = make_identifier(attendee_type, numeric_id)
        except MalformedIdentifier as e:
            self.logger.warning(f"Toggle check-in rejected ({context}): {e}")
            return ToggleResult(ToggleStatus.MALFORMED_IDENTIFIER)

        try:
            event = self._discover_event(identifier)
            if event_id is not None and event.id != event_id:
                raise AttendeeNotFound(f"{identifier} belongs to event {event.id}")

            repository = self.resolver.resolve(event)
            record = repository.load_by_identifier(event, identifier)
            if record is None:
                raise AttendeeNotFound(f"No attendee {identifier} in event {event.id}")

            actor = self.actors.load_user(acting_user_id)
            if actor is None:
                raise ActorNotFound(f"No user {acting_user_id}")

            if record.checked_in:
                record = repository.undo_check_in(identifier, actor)
            else:
                record = repository.check_in(identifier, actor)
            return ToggleResult(ToggleStatus.TOGGLED, record.checked_in)
        except AttendeeNotFound as e:
            self.logger.warning(f"Toggle check-in: attendee not found ({context}): {e}")
            return ToggleResult(ToggleStatus.NOT_FOUND)
        except EventNotFound as e:
            self.logger.warning(f"Toggle check-in: event not found ({context}): {e}")
            return ToggleResult(ToggleStatus.EVENT_NOT_FOUND)
        except ActorNotFound as e:
            self.logger.warning(f"Toggle check-in: actor not found ({context}): {e}")
            return ToggleResult(ToggleStatus.ACTOR_MISSING)
        except PersistenceFailure as e:
            self.logger.error(f"Failed to toggle check-in ({context}): {e}")
            return ToggleResult(ToggleStatus.PERSIST_ERROR)
        except Exception:
            self.logger.exception(f"Failed to toggle check-in ({context})")
            return ToggleResult(ToggleStatus.PERSIST_ERROR)

    def toggle_check_in(
        self,
        numeric_id: int,
        attendee_type: str,
        acting_user_id: int,
        *,
        event_id: int | None = None,
    ) -> bool:
        """Toggle and return the new checked-in state; False on any failure."""
        result = self.toggle(numeric_id, attendee_type, acting_user_id, event_id=event_id)
        return result.ok and result.checked_in
