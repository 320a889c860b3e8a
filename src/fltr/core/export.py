"""Export and detail views of timeline events."""

import csv
import io
import re
from datetime import datetime
from pathlib import Path

from fltr.models.event import Event

EXPORT_FILENAME = "fltr_timeline_export.csv"
EXPORT_HEADER = ["Time", "Source", "Severity", "Event", "Detail", "Annotation"]

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(text: str) -> str:
    """Remove HTML tags from text."""
    return _TAG_PATTERN.sub("", text)


def export_csv(events: list[Event]) -> str:
    """Render events as CSV text with the export header row.

    Fields holding a comma or quote are quoted; everything else is
    written verbatim.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for event in events:
        writer.writerow([
            event.time,
            event.source,
            event.severity,
            strip_tags(event.event),
            event.detail,
            event.annotation,
        ])
    return buffer.getvalue().rstrip("\n")


def write_export(events: list[Event], path: Path | None = None) -> Path:
    """Write the CSV export, by default to ``fltr_timeline_export.csv``."""
    if path is None:
        path = Path(EXPORT_FILENAME)
    path.write_text(export_csv(events), encoding="utf-8")
    return path


def raw_view(event: Event) -> str:
    """Return the stored raw record, or a reconstruction if there is none."""
    if event.raw:
        return event.raw

    description = strip_tags(event.event)
    templates = {
        "windows": (
            f"[{event.time}] Microsoft-Windows-Security-Auditing\n"
            f"Event ID: {event.detail or '4625'}\n"
        ),
        "linux": f"[{event.time}] {event.source} sudo: {description}\n",
        "csv": f"[{event.time}] CSV | {description} | {event.detail}",
        "log": f"[{event.time}] [{event.source}] INFO: {description}",
    }
    return templates.get(event.source_type, templates["log"])


def details_text(
    event: Event,
    viewed_at: datetime | str,
    file_hash: str = "",
) -> str:
    """Plain-text details block for copying an event elsewhere."""
    if isinstance(viewed_at, datetime):
        viewed_at = viewed_at.strftime("%Y-%m-%d %H:%M:%S UTC")

    rule = "=" * 24
    return "\n".join([
        "FLTR Event Details",
        rule,
        f"Event ID: #{event.id}",
        f"Time: {event.time}",
        f"Source: {event.source} ({event.source_type})",
        f"Type: {event.type.upper()}",
        f"Severity: {event.severity}",
        f"Event: {strip_tags(event.event)}",
        f"Detail: {event.detail}",
        f"Annotation: {event.annotation or 'None'}",
        rule,
        f"Viewed at: {viewed_at}",
        f"SHA256: {file_hash}",
    ])
