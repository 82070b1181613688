"""Attendee identifiers.

Every attendee is addressed as ``"<source type>:<numeric id>"``, e.g.
``"rsvp:7"`` or ``"ticket:42"``. The prefix names the source that owns the
record, so routing never depends on the record's content. The set of source
types is closed; a new source needs a new ``SourceType`` member.
"""

import re
from enum import StrEnum
from typing import NamedTuple

from checkin.attendees.errors import MalformedIdentifier

_IDENTIFIER_RE = re.compile(r"([a-z]+):(\d+)", re.ASCII)


class SourceType(StrEnum):
    """Backing store an attendee record comes from."""

    RSVP = "rsvp"
    TICKET = "ticket"


class AttendeeIdentifier(NamedTuple):
    """Decoded attendee identifier."""

    source_type: SourceType
    numeric_id: int

    def __str__(self) -> str:
        return encode(self.source_type, self.numeric_id)


def _source_type(value: str) -> SourceType:
    try:
        return SourceType(value)
    except ValueError:
        raise MalformedIdentifier(f"Unknown attendee source type: {value!r}") from None


def encode(source_type: SourceType | str, numeric_id: int) -> str:
    """Build the string form of an identifier."""
    source_type = _source_type(source_type)
    if isinstance(numeric_id, bool) or not isinstance(numeric_id, int) or numeric_id < 1:
        raise MalformedIdentifier(f"Attendee id must be a positive integer, got {numeric_id!r}")
    return f"{source_type.value}:{numeric_id}"


def decode(identifier: str) -> AttendeeIdentifier:
    """Parse ``"<type>:<id>"`` into an AttendeeIdentifier.

    Raises:
        MalformedIdentifier: unknown prefix, or the suffix is not a
            positive integer.
    """
    match = _IDENTIFIER_RE.fullmatch(identifier) if isinstance(identifier, str) else None
    if not match:
        raise MalformedIdentifier(f"Malformed attendee identifier: {identifier!r}")
    numeric_id = int(match.group(2))
    if numeric_id < 1:
        raise MalformedIdentifier(f"Malformed attendee identifier: {identifier!r}")
    return AttendeeIdentifier(_source_type(match.group(1)), numeric_id)


def make_identifier(source_type: SourceType | str, numeric_id: int) -> AttendeeIdentifier:
    """Validate and build an identifier from its parts."""
    return decode(encode(source_type, numeric_id))


def coerce(identifier: "AttendeeIdentifier | str") -> AttendeeIdentifier:
    """Accept either form of identifier."""
    if isinstance(identifier, AttendeeIdentifier):
        return identifier
    return decode(identifier)
