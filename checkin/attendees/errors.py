"""Exceptions raised by the attendee sources and the check-in coordinator."""


class CheckInError(Exception):
    """Base class for check-in errors."""


class MalformedIdentifier(CheckInError, ValueError):
    """An attendee identifier is not of the form ``<type>:<positive int>``."""


class AttendeeNotFound(CheckInError, LookupError):
    """No source owns or can locate the attendee within the event."""


class ActorNotFound(CheckInError, LookupError):
    """The acting user id does not resolve to a user."""


class EventNotFound(CheckInError, LookupError):
    """The event id does not resolve to an event."""


class PersistenceFailure(CheckInError):
    """The owning source failed to write check-in state."""


class DuplicateSourceType(CheckInError, ValueError):
    """Two attendee sources were registered for the same source type."""
