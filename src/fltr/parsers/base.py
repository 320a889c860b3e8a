"""Base parser interface for FLTR."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import ClassVar

from fltr.models.event import Event
from fltr.normalizer.classify import classify_source_type, file_extension
from fltr.normalizer.extract import format_current_time


class BaseParser(ABC):
    """Base class for all input-format parsers.

    Parsers turn the raw bytes of one file into Events. Ids are assigned
    consecutively from ``start_id`` in input order, so the caller controls
    id allocation across files.
    """

    # Parser metadata (must be set by subclasses)
    name: ClassVar[str]
    version: ClassVar[str]
    supported_extensions: ClassVar[list[str]]

    def __init__(
        self,
        filename: str,
        start_id: int = 1,
        now: datetime | None = None,
    ) -> None:
        """Initialize parser with context.

        Args:
            filename: Name of the file being parsed (drives fallbacks)
            start_id: Id given to the first event produced
            now: Ingestion time used when a record carries no timestamp
        """
        self.filename = filename
        self.start_id = start_id
        self.now = now or datetime.now(UTC)
        self.source_type = classify_source_type(filename)
        self._next_id = start_id

    @abstractmethod
    def parse(self, data: bytes) -> list[Event]:
        """Parse file content into events.

        Args:
            data: Raw file content

        Returns:
            Events in input order
        """
        ...

    def allocate_id(self) -> int:
        """Return the next event id for this file."""
        event_id = self._next_id
        self._next_id += 1
        return event_id

    def current_time(self) -> str:
        """Canonical form of the ingestion time."""
        return format_current_time(self.now)

    @staticmethod
    def decode(data: bytes) -> str:
        """Decode content as text, replacing undecodable bytes."""
        return data.decode("utf-8-sig", errors="replace")

    @staticmethod
    def content_lines(text: str) -> list[str]:
        """Split text into newline-separated records, dropping blank ones.

        Only ``\n`` ends a record; a trailing ``\r`` is removed.
        """
        lines = (line.removesuffix("\r") for line in text.split("\n"))
        return [line for line in lines if line.strip()]


class ParserRegistry:
    """Registry of available parsers, keyed by file extension."""

    DEFAULT_EXTENSION = "log"

    _parsers: ClassVar[dict[str, type[BaseParser]]] = {}

    @classmethod
    def register(cls, parser_class: type[BaseParser]) -> type[BaseParser]:
        """Register a parser class.

        Args:
            parser_class: Parser class to register

        Returns:
            The registered class (for use as decorator)
        """
        for extension in parser_class.supported_extensions:
            cls._parsers[extension] = parser_class
        return parser_class

    @classmethod
    def get(cls, extension: str) -> type[BaseParser] | None:
        """Get parser for an extension (case-insensitive)."""
        return cls._parsers.get(extension.lower())

    @classmethod
    def for_filename(cls, filename: str) -> type[BaseParser]:
        """Get parser for a file name; unknown extensions use the log parser."""
        parser_class = cls.get(file_extension(filename))
        if parser_class is None:
            parser_class = cls._parsers[cls.DEFAULT_EXTENSION]
        return parser_class
