"""In-memory event store for a timeline session."""

from collections.abc import Iterable

from fltr.core.errors import EventNotFoundError
from fltr.models.event import SEVERITY_LEVELS, Event, LoadedFile, SeverityLevel


class EventStore:
    """Ordered collection of events plus loaded-file provenance.

    Insertion order is preserved and acts as the secondary ordering for
    events sharing a timestamp. Events are never deduplicated.
    """

    def __init__(self, bootstrap: Iterable[Event] | None = None) -> None:
        """Initialize the store.

        Args:
            bootstrap: Sample events restored by ``reset()``
        """
        self._bootstrap = [event.model_copy() for event in bootstrap or []]
        self._events: list[Event] = [event.model_copy() for event in self._bootstrap]
        self._loaded_files: list[LoadedFile] = []

    @property
    def events(self) -> list[Event]:
        """Snapshot of stored events in insertion order."""
        return list(self._events)

    @property
    def loaded_files(self) -> list[LoadedFile]:
        """Snapshot of loaded-file provenance in load order."""
        return list(self._loaded_files)

    def __len__(self) -> int:
        return len(self._events)

    def next_id(self) -> int:
        """Return the highest stored id plus one (1 when empty)."""
        return max((event.id for event in self._events), default=0) + 1

    def append_events(self, events: Iterable[Event]) -> int:
        """Append events in the given order.

        Returns:
            Number of events appended
        """
        added = list(events)
        self._events.extend(added)
        return len(added)

    def add_loaded_file(self, loaded_file: LoadedFile) -> None:
        """Record provenance for an ingested file."""
        self._loaded_files.append(loaded_file)

    def get(self, event_id: int) -> Event:
        """Look up an event by id.

        Raises:
            EventNotFoundError: If no stored event has this id
        """
        for event in self._events:
            if event.id == event_id:
                return event
        raise EventNotFoundError(event_id)

    def set_annotation(self, event_id: int, text: str) -> Event:
        """Replace the analyst note on an event."""
        event = self.get(event_id)
        event.annotation = text
        return event

    def annotation_count(self) -> int:
        """Count events carrying a non-empty annotation."""
        return sum(1 for event in self._events if event.annotation)

    def all_hosts(self) -> set[str]:
        """Distinct lowercased sources across stored events."""
        return {event.source.lower() for event in self._events}

    def severity_counts(self) -> dict[SeverityLevel, int]:
        """Count stored events per severity, all levels present."""
        return count_by_severity(self._events)

    def reset(self) -> None:
        """Restore the bootstrap events and forget loaded files."""
        self._events = [event.model_copy() for event in self._bootstrap]
        self._loaded_files = []

    def clear(self) -> None:
        """Remove all events and loaded files."""
        self._events = []
        self._loaded_files = []


def count_by_severity(events: Iterable[Event]) -> dict[SeverityLevel, int]:
    """Count events per severity, zero-filled for every level."""
    counts: dict[SeverityLevel, int] = {level: 0 for level in SEVERITY_LEVELS}
    for event in events:
        counts[event.severity] += 1
    return counts
