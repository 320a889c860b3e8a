"""CSV timeline parser.

Expected columns: timestamp, source, severity, event, detail. A header
row is recognized by the token ``timestamp`` and skipped.
"""

from fltr.core import logging
from fltr.models.event import Event
from fltr.normalizer.classify import classify_severity
from fltr.parsers.base import BaseParser, ParserRegistry

PARSER_VERSION = "0.1.0"

EXCERPT_LENGTH = 100


def split_csv_line(line: str) -> list[str]:
    """Split a CSV line on commas outside double quotes.

    Quotes toggle the quoted state and are dropped. Escaped quotes
    (``""``) are not recognized: each one toggles the state again.
    """
    fields = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())

    return fields


@ParserRegistry.register
class CsvParser(BaseParser):
    """Parser for comma-separated timeline exports."""

    name = "csv"
    version = PARSER_VERSION
    supported_extensions = ["csv"]

    def parse(self, data: bytes) -> list[Event]:
        lines = [line.strip() for line in self.content_lines(self.decode(data))]
        if not lines:
            return []

        start = 1 if "timestamp" in lines[0].lower() else 0
        events = []

        for line_number, line in enumerate(lines[start:], start=start + 1):
            fields = split_csv_line(line)
            if len(fields) < 2:
                logging.debug(
                    f"Dropping CSV row {line_number} of {self.filename}: fewer than 2 fields"
                )
                continue
            events.append(self._to_event(fields, line))

        return events

    def _to_event(self, fields: list[str], line: str) -> Event:
        def field(index: int) -> str:
            return fields[index] if index < len(fields) else ""

        description = field(3) or " - ".join(fields[2:]) or line[:EXCERPT_LENGTH]

        return Event(
            id=self.allocate_id(),
            time=field(0) or self.current_time(),
            source=field(1) or self.filename,
            source_type=self.source_type,
            type="csv",
            severity=classify_severity(field(2) or " ".join(fields)),
            event=description,
            detail=field(4),
            raw=line,
        )
