"""Attendees holding paid tickets."""

from checkin.attendees.identifier import AttendeeIdentifier, SourceType
from checkin.attendees.record import AttendeeRecord
from checkin.attendees.sources.base import StoreBackedSource
from checkin.attendees.stores import TicketStore
from checkin.models import Event, OrderAttendee


class TicketAttendeeSource(StoreBackedSource):
    """Confirmed order attendees, keyed by the event they were sold for."""

    source_type = SourceType.TICKET

    def __init__(self, store: TicketStore):
        super().__init__(store)

    def supports(self, event: Event) -> bool:
        return event.ticketing_enabled or self.store.has_any_for_event(event.id)

    def to_record(self, row: OrderAttendee) -> AttendeeRecord:
        return AttendeeRecord(
            identifier=AttendeeIdentifier(self.source_type, row.id),
            event_id=row.event_id,
            display_name=row.name or row.email or f"Ticket holder {row.id}",
            email=row.email or "",
            checked_in=row.checked_in,
            checked_in_at=row.checked_in_at,
            checked_in_by=row.checked_in_by,
            ticket_code=row.ticket_code,
        )
