from checkin.attendees.sources.base import AttendeeSource, StoreBackedSource
from checkin.attendees.sources.composite import CompositeAttendeeSource
from checkin.attendees.sources.rsvp import RsvpAttendeeSource
from checkin.attendees.sources.ticket import TicketAttendeeSource

__all__ = [
    "AttendeeSource",
    "StoreBackedSource",
    "CompositeAttendeeSource",
    "RsvpAttendeeSource",
    "TicketAttendeeSource",
]
