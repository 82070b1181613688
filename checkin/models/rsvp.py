"""RSVP submission model for free event registrations.

Submissions are created by the public RSVP form. Only confirmed
submissions count as attendees; the check-in desk writes the
``checked_in*`` columns and nothing else.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from checkin.models.event import Event

RSVP_STATUS_CONFIRMED = "confirmed"
RSVP_STATUS_WAITLIST = "waitlist"
RSVP_STATUS_CANCELLED = "cancelled"


class RsvpSubmission(SQLModel, table=True):
    """A free RSVP to an event.

    Attributes:
        id: Numeric primary key; the ``rsvp:<id>`` attendee identifier.
        event_id: Foreign key to the event.
        attendee_name: Name entered on the form. Older submissions may only
            have an email address.
        email: Contact email address.
        guests: Number of additional guests (informational only).
        status: One of "confirmed", "waitlist" or "cancelled".
        checked_in: Whether the attendee has been admitted.
        checked_in_at: When the attendee was admitted.
        checked_in_by: User who admitted the attendee.
        created_at: Submission time; defines list order.
        event: Reference to the parent Event object.
    """
    __tablename__ = "rsvp_submission"

    id: int | None = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    attendee_name: str | None = None
    email: str = Field(default="")
    guests: int = Field(default=0)
    status: str = Field(default=RSVP_STATUS_CONFIRMED)
    checked_in: bool = Field(default=False)
    checked_in_at: datetime | None = None
    checked_in_by: int | None = Field(default=None, foreign_key="app_user.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="rsvps")
