"""Static registry of attendee sources.

Adding a source means adding a SourceType member, a store and a source
class, and listing it here. Registration order is the order attendees are
listed in on mixed events.
"""

from sqlmodel import Session

from checkin.attendees.coordinator import CheckInCoordinator
from checkin.attendees.identifier import SourceType
from checkin.attendees.resolver import SourceResolver
from checkin.attendees.sources import AttendeeSource, RsvpAttendeeSource, TicketAttendeeSource
from checkin.attendees.stores import EventStore, RsvpStore, TicketStore, UserStore
from checkin.core.config import Settings, settings as default_settings


def build_sources(
    rsvp_store: RsvpStore, ticket_store: TicketStore, settings: Settings
) -> list[AttendeeSource]:
    sources: list[AttendeeSource] = []
    if settings.rsvp_source_enabled:
        sources.append(RsvpAttendeeSource(rsvp_store))
    if settings.ticket_source_enabled:
        sources.append(TicketAttendeeSource(ticket_store))
    return sources


def build_coordinator(session: Session, settings: Settings | None = None) -> CheckInCoordinator:
    """Wire a coordinator and its collaborators onto one database session."""
    settings = settings or default_settings
    rsvp_store = RsvpStore(session)
    ticket_store = TicketStore(session)
    return CheckInCoordinator(
        resolver=SourceResolver(build_sources(rsvp_store, ticket_store, settings)),
        events=EventStore(session),
        stores={SourceType.RSVP: rsvp_store, SourceType.TICKET: ticket_store},
        actors=UserStore(session),
    )
