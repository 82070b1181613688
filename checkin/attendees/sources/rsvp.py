"""Attendees who registered through the free RSVP form."""

from checkin.attendees.identifier import AttendeeIdentifier, SourceType
from checkin.attendees.record import AttendeeRecord
from checkin.attendees.sources.base import StoreBackedSource
from checkin.attendees.stores import RsvpStore
from checkin.models import Event, RsvpSubmission


class RsvpAttendeeSource(StoreBackedSource):
    """Confirmed RSVP submissions, keyed by event id."""

    source_type = SourceType.RSVP

    def __init__(self, store: RsvpStore):
        super().__init__(store)

    def supports(self, event: Event) -> bool:
        # Keep listing old RSVPs after an event switches to paid tickets
        return event.rsvp_enabled or self.store.has_any_for_event(event.id)

    def to_record(self, row: RsvpSubmission) -> AttendeeRecord:
        return AttendeeRecord(
            identifier=AttendeeIdentifier(self.source_type, row.id),
            event_id=row.event_id,
            # Legacy submissions were stored without a name
            display_name=row.attendee_name or row.email or f"Guest {row.id}",
            email=row.email or "",
            checked_in=row.checked_in,
            checked_in_at=row.checked_in_at,
            checked_in_by=row.checked_in_by,
        )
