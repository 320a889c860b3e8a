"""Severity and source-type classification.

Both classifiers are ordered rule tables evaluated first-match-wins, so
precedence is visible in one place and each rule can be tested alone.
"""

import re
from collections.abc import Callable

from fltr.models.event import SeverityLevel, SourceType

SEVERITY_RULES: list[tuple[re.Pattern[str], SeverityLevel]] = [
    (
        re.compile(
            r"failed|error|critical|alert|attack|breach|hack|malware"
            r"|intrusion|unauthorized|denied|threat",
            re.IGNORECASE,
        ),
        "critical",
    ),
    (
        re.compile(
            r"warning|warn|suspicious|failed|failure|deny|block|exploit|privilege",
            re.IGNORECASE,
        ),
        "high",
    ),
    (re.compile(r"notice|moderate|attention", re.IGNORECASE), "medium"),
    (re.compile(r"info|information|debug|verbose", re.IGNORECASE), "low"),
]

DEFAULT_SEVERITY: SeverityLevel = "info"


def classify_severity(text: str) -> SeverityLevel:
    """Classify text by keyword, most urgent rule first.

    Args:
        text: Any text (a whole log line or a single CSV field)

    Returns:
        Severity level, ``info`` when no rule matches
    """
    for pattern, severity in SEVERITY_RULES:
        if pattern.search(text):
            return severity
    return DEFAULT_SEVERITY


def file_extension(filename: str) -> str:
    """Return the lowercased text after the last dot.

    A name without a dot is its own extension (``syslog`` -> ``syslog``).
    """
    return filename.rsplit(".", 1)[-1].lower()


def _rule(
    extensions: set[str], name_pattern: str
) -> Callable[[str, str], bool]:
    pattern = re.compile(name_pattern, re.IGNORECASE)

    def matches(ext: str, name: str) -> bool:
        return ext in extensions or bool(pattern.search(name))

    return matches


SOURCE_TYPE_RULES: list[tuple[Callable[[str, str], bool], SourceType]] = [
    (_rule({"evtx"}, r"security|system|application|event"), "windows"),
    (_rule({"csv"}, r"csv"), "csv"),
    (_rule({"log"}, r"syslog|auth|apache|nginx|audit"), "log"),
    (_rule({"txt"}, r"log|output"), "log"),
]

DEFAULT_SOURCE_TYPE: SourceType = "log"


def classify_source_type(filename: str) -> SourceType:
    """Classify a file by name only; content is never inspected."""
    ext = file_extension(filename)
    for matches, source_type in SOURCE_TYPE_RULES:
        if matches(ext, filename):
            return source_type
    return DEFAULT_SOURCE_TYPE
