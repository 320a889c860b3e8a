"""Timestamp and host extraction from free-form log lines."""

import re
from collections.abc import Callable
from datetime import UTC, datetime

CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

MONTHS = {
    name: index
    for index, name in enumerate(
        ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
         "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        start=1,
    )
}

ISO_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})[T\s](\d{2}:\d{2}:\d{2})")
SYSLOG_PATTERN = re.compile(
    r"(" + "|".join(MONTHS) + r")\s+(\d{1,2})\s+(\d{2}:\d{2}:\d{2})"
)
US_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})\s+(\d{2}:\d{2}:\d{2})")

IPV4_PATTERN = re.compile(r"\b(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})\b")
LABELED_HOST_PATTERN = re.compile(
    r"(?:host|server|source|from)[:=\s]+([a-zA-Z0-9\-_]+)", re.IGNORECASE
)

# Leading prefixes removed from a line to form its description.
# Only the first matching prefix is stripped.
LINE_PREFIX_PATTERNS = [
    re.compile(r"^\d{4}-\d{2}-\d{2}[T\s]\d{2}:\d{2}:\d{2}\S*\s*"),
    re.compile(r"^[A-Z][a-z]{2}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2}\s+\S+\s+"),
]


def format_current_time(now: datetime | None = None) -> str:
    """Format a wall-clock time in canonical form (defaults to now)."""
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is not None:
        now = now.astimezone(UTC)
    return now.strftime(CANONICAL_FORMAT)


def _from_iso(match: re.Match[str], year: int) -> str:
    return f"{match.group(1)} {match.group(2)} UTC"


def _from_syslog(match: re.Match[str], year: int) -> str:
    month = MONTHS[match.group(1)]
    day = int(match.group(2))
    return f"{year:04d}-{month:02d}-{day:02d} {match.group(3)} UTC"


def _from_us(match: re.Match[str], year: int) -> str:
    month, day, us_year, clock = match.groups()
    return f"{us_year}-{month}-{day} {clock} UTC"


TIMESTAMP_RULES: list[tuple[re.Pattern[str], Callable[[re.Match[str], int], str]]] = [
    (ISO_PATTERN, _from_iso),
    (SYSLOG_PATTERN, _from_syslog),
    (US_PATTERN, _from_us),
]


def extract_timestamp(line: str, year: int | None = None) -> str | None:
    """Extract the first recognizable timestamp from a line.

    Args:
        line: Raw log line
        year: Year for syslog-style stamps, which carry none
            (defaults to the current year)

    Returns:
        Canonical 'YYYY-MM-DD HH:MM:SS UTC' string, or None
    """
    if year is None:
        year = datetime.now(UTC).year

    for pattern, convert in TIMESTAMP_RULES:
        match = pattern.search(line)
        if match:
            return convert(match, year)
    return None


def extract_host(line: str) -> str | None:
    """Extract an IPv4 address or a labeled host token from a line."""
    match = IPV4_PATTERN.search(line)
    if match:
        return match.group(1)

    match = LABELED_HOST_PATTERN.search(line)
    if match:
        return match.group(1)

    return None


def strip_line_prefix(line: str) -> str:
    """Remove a leading datetime (or syslog datetime + hostname) prefix."""
    for pattern in LINE_PREFIX_PATTERNS:
        stripped, count = pattern.subn("", line, count=1)
        if count:
            return stripped.strip()
    return line.strip()
