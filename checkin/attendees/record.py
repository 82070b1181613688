"""Canonical attendee record and its serialized views."""

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel

from checkin.attendees.identifier import AttendeeIdentifier, SourceType


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


@dataclass(frozen=True)
class AttendeeRecord:
    """A source-agnostic attendee.

    Records are rebuilt from the backing row on every read. ``checked_in_at``
    and ``checked_in_by`` are only meaningful while ``checked_in`` is true.
    """

    identifier: AttendeeIdentifier
    event_id: int
    display_name: str
    email: str = ""
    checked_in: bool = False
    checked_in_at: datetime | None = None
    checked_in_by: int | None = None
    ticket_code: str | None = None

    def __post_init__(self):
        if not self.display_name:
            raise ValueError(f"Attendee {self.identifier} has no display name")
        if not self.checked_in:
            object.__setattr__(self, "checked_in_at", None)
            object.__setattr__(self, "checked_in_by", None)
        else:
            object.__setattr__(self, "checked_in_at", as_utc(self.checked_in_at))

    @property
    def source_type(self) -> SourceType:
        return self.identifier.source_type

    def to_export_row(self) -> dict:
        """Row for the attendee CSV export."""
        return {
            "name": self.display_name,
            "email": self.email,
            "ticket_type": None,
            "checked_in": self.checked_in,
            "checked_in_at": self.checked_in_at.isoformat() if self.checked_in_at else None,
            "source": self.source_type.value,
            "ticket_code": self.ticket_code,
        }


class AttendeeView(BaseModel):
    """Attendee as returned by the check-in API."""

    id: int
    identifier: str
    type: SourceType
    name: str
    email: str
    checked_in: bool
    checked_in_at: int | None = None
    checked_in_by: int | None = None

    @classmethod
    def from_record(cls, record: AttendeeRecord) -> "AttendeeView":
        checked_in_at = record.checked_in_at
        return cls(
            id=record.identifier.numeric_id,
            identifier=str(record.identifier),
            type=record.source_type,
            name=record.display_name,
            email=record.email,
            checked_in=record.checked_in,
            checked_in_at=int(checked_in_at.timestamp()) if checked_in_at else None,
            checked_in_by=record.checked_in_by,
        )


class CheckInStats(BaseModel):
    """Headline numbers for the check-in page."""

    total: int
    checked_in: int

    @property
    def remaining(self) -> int:
        return self.total - self.checked_in

    def as_dict(self) -> dict:
        return {"total": self.total, "checked_in": self.checked_in, "remaining": self.remaining}
