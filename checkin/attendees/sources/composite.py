"""Several attendee sources presented as one."""

from checkin.attendees.errors import AttendeeNotFound, DuplicateSourceType, MalformedIdentifier
from checkin.attendees.identifier import AttendeeIdentifier, SourceType, coerce
from checkin.attendees.record import AttendeeRecord
from checkin.attendees.sources.base import AttendeeSource
from checkin.models import Event, User


def index_by_type(sources) -> dict[SourceType, AttendeeSource]:
    """Map each source type to its source, refusing duplicates.

    Identifiers are namespaced by source type, so two sources can only ever
    claim the same identifier if they share a type.
    """
    by_type: dict[SourceType, AttendeeSource] = {}
    for source in sources:
        if source.source_type in by_type:
            raise DuplicateSourceType(
                f"Both {by_type[source.source_type]!r} and {source!r} "
                f"serve {source.source_type.value!r} attendees"
            )
        by_type[source.source_type] = source
    return by_type


class CompositeAttendeeSource(AttendeeSource):
    """Aggregates attendee sources in the order supplied.

    Reads are concatenated. Point lookups and writes are routed by the
    identifier's source type to exactly one contained source; the others are
    never consulted.
    """

    source_type = None

    def __init__(self, sources: list[AttendeeSource] | tuple[AttendeeSource, ...] = ()):
        self.sources = tuple(sources)
        self._by_type = index_by_type(self.sources)

    def __repr__(self) -> str:
        return f"<CompositeAttendeeSource sources={list(self.sources)!r}>"

    def _route(self, identifier) -> tuple[AttendeeIdentifier, AttendeeSource]:
        try:
            identifier = coerce(identifier)
        except MalformedIdentifier:
            raise AttendeeNotFound(f"No source owns {identifier!r}") from None
        source = self._by_type.get(identifier.source_type)
        if source is None:
            raise AttendeeNotFound(f"No source owns {identifier}")
        return identifier, source

    def supports(self, event: Event) -> bool:
        return any(source.supports(event) for source in self.sources)

    def load_by_event(self, event: Event) -> list[AttendeeRecord]:
        records: list[AttendeeRecord] = []
        for source in self.sources:
            records.extend(source.load_by_event(event))
        return records

    def load_by_identifier(self, event, identifier):
        try:
            identifier, source = self._route(identifier)
        except AttendeeNotFound:
            return None
        return source.load_by_identifier(event, identifier)

    def check_in(self, identifier, actor: User) -> AttendeeRecord:
        identifier, source = self._route(identifier)
        return source.check_in(identifier, actor)

    def undo_check_in(self, identifier, actor: User) -> AttendeeRecord:
        identifier, source = self._route(identifier)
        return source.undo_check_in(identifier, actor)

    def count_by_event(self, event: Event) -> int:
        return sum(source.count_by_event(event) for source in self.sources)

    def count_checked_in(self, event: Event) -> int:
        return sum(source.count_checked_in(event) for source in self.sources)
