"""Output formatting for the FLTR CLI.

Results go to stdout as JSON, JSONL or a human-readable timeline table.
Logs and notifications go to stderr (see ``fltr.core.logging``).
"""

import json
import sys
from collections.abc import Iterable
from datetime import datetime
from typing import Any, Literal, TextIO

from pydantic import BaseModel

from fltr.models.event import Event

OutputFormat = Literal["json", "jsonl", "human"]

# (field, heading, width) for the human timeline table
TIMELINE_COLUMNS: list[tuple[str, str, int]] = [
    ("id", "ID", 5),
    ("time", "Time", 23),
    ("source", "Source", 16),
    ("severity", "Severity", 8),
    ("event", "Event", 60),
    ("annotation", "Note", 24),
]

NO_MATCHES = "No events match your filters."

_output_format: OutputFormat = "json"


def set_output_format(format: OutputFormat) -> None:
    """Set the global output format used for errors."""
    global _output_format
    _output_format = format


class JSONEncoder(json.JSONEncoder):
    """JSON encoder aware of view timestamps and pydantic models."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        return super().default(obj)


def _write_json(data: Any, file: TextIO) -> None:
    json.dump(data, file, cls=JSONEncoder, ensure_ascii=False)
    file.write("\n")


def _cell(value: Any, width: int) -> str:
    text = " ".join(str(value).split())
    if len(text) > width:
        text = text[: width - 3] + "..."
    return text.ljust(width)


def write_timeline_table(events: list[Event], file: TextIO | None = None) -> None:
    """Write events as a fixed-width timeline table with an end marker."""
    file = file or sys.stdout

    if not events:
        file.write(NO_MATCHES + "\n")
        file.flush()
        return

    file.write(" | ".join(_cell(heading, width) for _, heading, width in TIMELINE_COLUMNS) + "\n")
    file.write("-+-".join("-" * width for _, _, width in TIMELINE_COLUMNS) + "\n")

    for event in events:
        values = {
            "id": event.id,
            "time": event.time,
            "source": event.source,
            "severity": event.severity.upper(),
            "event": event.event,
            "annotation": event.annotation,
        }
        file.write(
            " | ".join(_cell(values[field], width) for field, _, width in TIMELINE_COLUMNS).rstrip()
            + "\n"
        )

    file.write(f"\n-- end of timeline ({len(events)} events) --\n")
    file.flush()


def _write_summary(data: dict[str, Any], file: TextIO, indent: int = 0) -> None:
    """Write a command summary (stats, export result, error) as key: value lines."""
    prefix = "  " * indent
    for key, value in data.items():
        if isinstance(value, dict):
            file.write(f"{prefix}{key}:\n")
            _write_summary(value, file, indent + 1)
        elif isinstance(value, list):
            file.write(f"{prefix}{key}:\n")
            for item in value:
                if isinstance(item, dict):
                    file.write(f"{prefix}  - " + ", ".join(str(v) for v in item.values()) + "\n")
                else:
                    file.write(f"{prefix}  - {item}\n")
        elif value is not None:
            file.write(f"{prefix}{key}: {value}\n")


def output(data: Any, format: OutputFormat | None = None, file: TextIO | None = None) -> None:
    """Output a single result (a dict or a model) in the given format.

    JSON and JSONL are identical for a single result.
    """
    format = format or _output_format
    file = file or sys.stdout

    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    if format == "human":
        _write_summary(data, file)
    else:
        _write_json(data, file)
    file.flush()


def output_error(error: Any, file: TextIO | None = None) -> None:
    """Output an error to stdout in the current format.

    Errors go to stdout (not stderr) for programmatic handling.
    """
    output(error, file=file)


class OutputFormatter:
    """Encapsulates output formatting for commands."""

    def __init__(self, format: OutputFormat = "json"):
        self.format = format

    def output(self, data: Any) -> None:
        output(data, format=self.format)

    def error(self, error: Any) -> None:
        output_error(error)

    def stream(self, events: Iterable[Event]) -> None:
        """Output timeline events.

        JSON collects them into one array, JSONL writes one per line,
        human renders the timeline table.
        """
        events = list(events)
        if self.format == "human":
            write_timeline_table(events)
            return

        records = [event.to_json_dict() for event in events]
        if self.format == "jsonl":
            for record in records:
                _write_json(record, sys.stdout)
        else:
            _write_json(records, sys.stdout)
        sys.stdout.flush()

    def is_human(self) -> bool:
        return self.format == "human"


class CliRenderer:
    """Renders the visible timeline through an OutputFormatter."""

    def __init__(self, formatter: OutputFormatter) -> None:
        self.formatter = formatter
        self.rendered: list[Event] = []

    def render(self, events: list[Event]) -> None:
        # Ingestion re-renders after every file; only the final view is printed.
        self.rendered = events

    def flush(self) -> None:
        self.formatter.stream(self.rendered)
