"""Event model for the events attendees are checked in to.

Events are owned by the wider platform; this application only needs enough
of them to decide which attendee sources apply and who may run the check-in
desk. Registration and ticket sales are managed elsewhere.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from checkin.models.order_attendee import OrderAttendee
    from checkin.models.rsvp import RsvpSubmission


class Event(SQLModel, table=True):
    """An event that attendees can be checked in to.

    An event may collect free RSVPs, sell paid tickets, or both. The two
    flags only describe what the event is configured to accept today; an
    event that switched from RSVP to paid tickets still has its old RSVP
    submissions, and those remain part of the check-in list.

    Attributes:
        id: Numeric primary key.
        title: Event title shown on the check-in page.
        owner_id: User who owns the event and may run its check-in desk.
        start_time: When the event starts.
        rsvp_enabled: Whether the event accepts free RSVP submissions.
        ticketing_enabled: Whether the event sells paid tickets.
        created_at: When the event was created.
        rsvps: RSVP submissions for this event.
        order_attendees: Attendees attached to paid order items.
    """
    id: int | None = Field(default=None, primary_key=True)
    title: str
    owner_id: int = Field(foreign_key="app_user.id", index=True)
    start_time: datetime
    rsvp_enabled: bool = Field(default=True)
    ticketing_enabled: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationships
    rsvps: list["RsvpSubmission"] = Relationship(back_populates="event")
    order_attendees: list["OrderAttendee"] = Relationship(back_populates="event")
