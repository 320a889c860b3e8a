"""Line-oriented log parser (.log, .txt and unknown extensions)."""

from fltr.models.event import Event
from fltr.normalizer.classify import classify_severity
from fltr.normalizer.extract import extract_host, extract_timestamp, strip_line_prefix
from fltr.parsers.base import BaseParser, ParserRegistry

PARSER_VERSION = "0.1.0"

MIN_LINE_LENGTH = 5
EXCERPT_LENGTH = 100


@ParserRegistry.register
class LogParser(BaseParser):
    """Heuristic parser producing one event per non-blank line."""

    name = "log"
    version = PARSER_VERSION
    supported_extensions = ["log", "txt"]

    def parse(self, data: bytes) -> list[Event]:
        return self.parse_text(self.decode(data))

    def parse_text(self, text: str) -> list[Event]:
        """Parse already-decoded text."""
        year = self.now.year
        events = []

        for line in self.content_lines(text):
            if len(line) < MIN_LINE_LENGTH:
                continue

            description = strip_line_prefix(line) or line[:EXCERPT_LENGTH]

            events.append(
                Event(
                    id=self.allocate_id(),
                    time=extract_timestamp(line, year=year) or self.current_time(),
                    source=extract_host(line) or self.filename,
                    source_type=self.source_type,
                    type="log",
                    severity=classify_severity(line),
                    event=description,
                    detail="",
                    raw=line,
                )
            )

        return events
