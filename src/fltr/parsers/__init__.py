"""Input-format parsers for FLTR."""

from datetime import datetime

# Import parsers to register them
from fltr.parsers import (
    csv,  # noqa: F401
    evtx,  # noqa: F401
    log,  # noqa: F401
)
from fltr.models.event import Event
from fltr.parsers.base import BaseParser, ParserRegistry
from fltr.parsers.evtx import parse_evtx_bytes


def parse_file(
    filename: str,
    data: bytes,
    start_id: int = 1,
    now: datetime | None = None,
) -> list[Event]:
    """Parse a file with the parser its extension selects.

    Args:
        filename: File name (extension drives dispatch, case-insensitive)
        data: Raw file content
        start_id: Id given to the first event produced
        now: Ingestion time for records without timestamps

    Returns:
        Events in input order
    """
    parser_class = ParserRegistry.for_filename(filename)
    return parser_class(filename, start_id=start_id, now=now).parse(data)


__all__ = ["BaseParser", "ParserRegistry", "parse_evtx_bytes", "parse_file"]
