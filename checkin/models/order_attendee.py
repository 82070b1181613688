"""Order attendee model for paid ticket holders.

Checkout creates one OrderAttendee per ticket on an order line item. The
ticket code printed on the ticket is stored here so the door staff can
cross-check it against the scanned pass.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from checkin.models.event import Event

ATTENDEE_STATUS_CONFIRMED = "confirmed"
ATTENDEE_STATUS_WAITLIST = "waitlist"
ATTENDEE_STATUS_CANCELLED = "cancelled"


class OrderAttendee(SQLModel, table=True):
    """A ticket holder attached to a paid order line item.

    Attributes:
        id: Numeric primary key; the ``ticket:<id>`` attendee identifier.
        event_id: Foreign key to the event the ticket was sold for.
        order_item_id: Line item on the commerce side, if still known.
        name: Ticket holder name.
        email: Ticket holder email address.
        ticket_code: Code printed on the ticket.
        status: One of "confirmed", "waitlist" or "cancelled". Refunded
            tickets are cancelled.
        checked_in: Whether the ticket holder has been admitted.
        checked_in_at: When the ticket holder was admitted.
        checked_in_by: User who admitted the ticket holder.
        created_at: Creation time; defines list order.
        event: Reference to the parent Event object.
    """
    __tablename__ = "order_attendee"

    id: int | None = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    order_item_id: int | None = Field(default=None, index=True)
    name: str
    email: str = Field(default="")
    ticket_code: str | None = Field(default=None, index=True)
    status: str = Field(default=ATTENDEE_STATUS_CONFIRMED)
    checked_in: bool = Field(default=False)
    checked_in_at: datetime | None = None
    checked_in_by: int | None = Field(default=None, foreign_key="app_user.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="order_attendees")
