"""Pick the attendee source(s) that serve an event."""

from checkin.attendees.sources.base import AttendeeSource
from checkin.attendees.sources.composite import CompositeAttendeeSource, index_by_type
from checkin.models import Event


class SourceResolver:
    """Resolves an event to the attendee source that serves it.

    Sources are evaluated in registration order on every call. Nothing is
    cached per event: an event can start selling tickets, or a source can be
    switched off, between two requests.
    """

    def __init__(self, sources: list[AttendeeSource]):
        index_by_type(sources)
        self.sources = tuple(sources)

    def resolve(self, event: Event) -> AttendeeSource:
        """Return the single supporting source, or a composite of all of them.

        Never returns None; an event no source supports gets an empty
        composite.
        """
        supporting = [source for source in self.sources if source.supports(event)]
        if len(supporting) == 1:
            return supporting[0]
        return CompositeAttendeeSource(supporting)
