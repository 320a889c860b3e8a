"""EVTX (Windows Event Log) input.

This is a placeholder, not a decoder. Binary EVTX records are never
parsed here: textual content that merely carries an .evtx name goes
through the line parser, and anything else is replaced by a fixed
demonstration sequence of Windows security events. A real decoder can
replace ``parse_evtx_bytes`` without changing its callers.
"""

from datetime import UTC, datetime, timedelta

from fltr.core import logging
from fltr.models.event import Event, SeverityLevel
from fltr.parsers.base import BaseParser, ParserRegistry
from fltr.parsers.log import LogParser

PARSER_VERSION = "0.1.0"

DEMO_HOST = "DC-02"
DEMO_EPOCH = datetime(2025, 2, 15, 3, 12, 47, tzinfo=UTC)
DEMO_INTERVAL = timedelta(minutes=15)

# (event id, description, severity)
DEMO_EVENTS: list[tuple[int, str, SeverityLevel]] = [
    (4624, "An account was successfully logged on", "info"),
    (4625, "An account failed to log on", "critical"),
    (4672, "Special privileges assigned to new logon", "high"),
    (4648, "A logon was attempted using explicit credentials", "medium"),
    (4634, "An account was logged off", "info"),
]


def looks_textual(data: bytes) -> bool:
    """Check whether content decodes as UTF-8 text without NUL bytes."""
    if b"\x00" in data:
        return False
    try:
        data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return False
    return True


def parse_evtx_bytes(
    data: bytes,
    filename: str,
    start_id: int = 1,
    now: datetime | None = None,
) -> list[Event]:
    """Turn .evtx-named content into events.

    Args:
        data: Raw file content
        filename: File name, used by the line-parser fallback
        start_id: Id given to the first event produced
        now: Ingestion time for lines without timestamps

    Returns:
        Line-parsed events for textual content, otherwise the demo set
    """
    if looks_textual(data):
        line_parser = LogParser(filename, start_id=start_id, now=now)
        text = line_parser.decode(data)
        if line_parser.content_lines(text):
            logging.debug(f"{filename} is textual, parsing it as a line log")
            return line_parser.parse_text(text)

    logging.debug(f"{filename}: binary EVTX decoding is not implemented, using demo events")
    return demo_events(start_id)


def demo_events(start_id: int = 1) -> list[Event]:
    """Build the fixed demonstration event sequence."""
    events = []
    for index, (event_id, description, severity) in enumerate(DEMO_EVENTS):
        timestamp = DEMO_EPOCH + index * DEMO_INTERVAL
        events.append(
            Event(
                id=start_id + index,
                time=timestamp.strftime("%Y-%m-%d %H:%M:%S UTC"),
                source=DEMO_HOST,
                source_type="windows",
                type="evtx",
                severity=severity,
                event=f"Event {event_id} - {description}",
                detail=f"Event ID: {event_id}",
                raw=f"EVTX Record #{index + 1}",
            )
        )
    return events


@ParserRegistry.register
class EvtxParser(BaseParser):
    """Placeholder parser for Windows Event Log files."""

    name = "evtx"
    version = PARSER_VERSION
    supported_extensions = ["evtx"]

    def parse(self, data: bytes) -> list[Event]:
        return parse_evtx_bytes(
            data, self.filename, start_id=self.start_id, now=self.now
        )
