"""Timeline session: the explicit context shared by ingestion, filtering
and the rendering layer.

The rendering layer owns all visual state. It receives filtered events
through ``TimelineRenderer.render`` and changes session state only
through the methods below.
"""

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from fltr.core import logging
from fltr.core.digest import compute_sha256
from fltr.core.errors import FltrError, IngestionError, ParseError, ValidationError
from fltr.core.export import export_csv, write_export
from fltr.core.filters import query
from fltr.core.store import EventStore
from fltr.models.error import StructuredError
from fltr.models.event import (
    SEVERITY_LEVELS,
    ActiveFilters,
    Event,
    LoadedFile,
    SeverityLevel,
    ViewRecord,
)
from fltr.parsers import parse_file


class TimelineRenderer(Protocol):
    """Presentation collaborator that displays filtered events."""

    def render(self, events: list[Event]) -> None: ...


Notifier = Callable[[str], None]


@dataclass
class IngestReport:
    """Outcome of ingesting one file."""

    name: str
    events_loaded: int = 0
    hash: str | None = None
    error: StructuredError | None = None
    hosts_added: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class TimelineSession:
    """Owns the event store, active filters and view history of a session."""

    def __init__(
        self,
        store: EventStore | None = None,
        filters: ActiveFilters | None = None,
        renderer: TimelineRenderer | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            store: Event store (a new empty one by default)
            filters: Initial filters (all severities, no restrictions by default)
            renderer: Receives the visible events after every change
            notifier: Receives short user-facing messages
            clock: Source of "now" for ingestion and view history
        """
        self.store = store if store is not None else EventStore()
        self.filters = filters if filters is not None else ActiveFilters()
        self.search_term = ""
        self.renderer = renderer
        self.notifier = notifier or logging.info
        self.clock = clock or (lambda: datetime.now(UTC))
        self.view_history: list[ViewRecord] = []
        self._ingest_lock = asyncio.Lock()

    # Queries

    def visible_events(self) -> list[Event]:
        """Events passing the active filters and search term."""
        return query(self.store.events, self.filters, self.search_term)

    def refresh(self) -> list[Event]:
        """Recompute the visible events and hand them to the renderer."""
        visible = self.visible_events()
        if self.renderer is not None:
            self.renderer.render(visible)
        return visible

    def severity_counts(self) -> dict[SeverityLevel, int]:
        return self.store.severity_counts()

    def all_hosts(self) -> set[str]:
        return self.store.all_hosts()

    # Ingestion

    async def load_bytes(self, name: str, data: bytes) -> IngestReport:
        """Ingest in-memory file content."""
        return await self._ingest(name, lambda: data)

    async def load_path(self, path: Path) -> IngestReport:
        """Ingest a file from disk."""
        return await self._ingest(path.name, path.read_bytes)

    async def load_paths(self, paths: Iterable[Path]) -> list[IngestReport]:
        """Ingest files one after another, in the given order.

        A failing file is reported and skipped; later files still load.
        """
        reports = []
        for path in paths:
            reports.append(await self.load_path(path))
        return reports

    async def _ingest(self, name: str, read: Callable[[], bytes]) -> IngestReport:
        async with self._ingest_lock:
            try:
                data = await self._read(name, read)
                digest = await self._digest(name, data)
                events = self._parse(name, data)
            except FltrError as e:
                logging.error(f"Error processing {name}: {e}", file_name=name)
                self.notifier(f"Error processing {name}")
                return IngestReport(name=name, error=e.to_structured())

            self.store.append_events(events)
            hosts_added = [
                event.source for event in events if self.filters.add_host(event.source)
            ]
            self.store.add_loaded_file(LoadedFile(name=name, size=len(data), hash=digest))

            logging.debug(
                f"{name}: {len(events)} events, sha256 {digest}",
                file_name=name,
                events=len(events),
            )
            self.notifier(f"Loaded {len(events)} events from {name}")
            self.refresh()

            return IngestReport(
                name=name,
                events_loaded=len(events),
                hash=digest,
                hosts_added=hosts_added,
            )

    async def _read(self, name: str, read: Callable[[], bytes]) -> bytes:
        try:
            return await asyncio.to_thread(read)
        except OSError as e:
            raise IngestionError(f"Cannot read {name}: {e}", file_name=name) from e

    async def _digest(self, name: str, data: bytes) -> str:
        try:
            return await asyncio.to_thread(compute_sha256, data)
        except (TypeError, ValueError) as e:
            raise IngestionError(f"Cannot digest {name}: {e}", file_name=name) from e

    def _parse(self, name: str, data: bytes) -> list[Event]:
        try:
            return parse_file(name, data, start_id=self.store.next_id(), now=self.clock())
        except ValueError as e:
            raise ParseError(f"Cannot parse {name}: {e}", file_name=name) from e

    # Filter editing

    def set_search(self, term: str) -> list[Event]:
        self.search_term = term
        return self.refresh()

    def add_keyword(self, keyword: str) -> list[Event]:
        keyword = keyword.strip()
        if keyword and keyword not in self.filters.keywords:
            self.filters.keywords.append(keyword)
        return self.refresh()

    def remove_keyword(self, keyword: str) -> list[Event]:
        self.filters.keywords = [k for k in self.filters.keywords if k != keyword]
        return self.refresh()

    def set_severities(self, severities: Iterable[str]) -> list[Event]:
        """Enable exactly the given severity levels.

        Raises:
            ValidationError: If a level is not one of the five known ones
        """
        chosen = list(dict.fromkeys(severities))
        unknown = [s for s in chosen if s not in SEVERITY_LEVELS]
        if unknown:
            raise ValidationError(
                f"Unknown severity level(s): {', '.join(unknown)}", field="severities"
            )
        self.filters.severities = [s for s in SEVERITY_LEVELS if s in chosen]
        return self.refresh()

    def toggle_severity(self, severity: str) -> list[Event]:
        if severity in self.filters.severities:
            remaining = [s for s in self.filters.severities if s != severity]
        else:
            remaining = [*self.filters.severities, severity]
        return self.set_severities(remaining)

    def set_hosts(self, hosts: Iterable[str]) -> list[Event]:
        self.filters.hosts = []
        for host in hosts:
            self.filters.add_host(host)
        return self.refresh()

    def toggle_all_hosts(self) -> list[Event]:
        """Select every known host, or none if all are already selected."""
        known = sorted(self.store.all_hosts())
        if all(self.filters.has_host(host) for host in known):
            return self.set_hosts([])
        return self.set_hosts(known)

    # Events

    def set_annotation(self, event_id: int, text: str) -> Event:
        event = self.store.set_annotation(event_id, text)
        self.refresh()
        return event

    def view_event(self, event_id: int) -> tuple[Event, ViewRecord]:
        """Look up an event for display and record the view."""
        event = self.store.get(event_id)
        record = ViewRecord(id=event.id, event=event.event, viewed_at=self.clock())
        self.view_history.append(record)
        logging.debug(f"Event #{event_id} viewed", event_id=event_id)
        return event, record

    # Lifecycle and export

    def reset(self) -> None:
        self.store.reset()
        self.refresh()

    def clear(self) -> None:
        self.store.clear()
        self.refresh()

    def export_csv(self) -> str:
        """CSV text of every stored event (filters do not apply)."""
        return export_csv(self.store.events)

    def write_export(self, path: Path | None = None) -> Path:
        return write_export(self.store.events, path)
