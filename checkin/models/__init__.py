from checkin.models.event import Event
from checkin.models.order_attendee import OrderAttendee
from checkin.models.rsvp import RsvpSubmission
from checkin.models.user import User

__all__ = ["Event", "OrderAttendee", "RsvpSubmission", "User"]
