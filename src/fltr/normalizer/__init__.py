"""Heuristic normalization of raw log text.

Provides:
- Severity and source-type classification (ordered rule tables)
- Timestamp and host extraction from free-form lines
"""

from fltr.normalizer.classify import classify_severity, classify_source_type
from fltr.normalizer.extract import (
    extract_host,
    extract_timestamp,
    format_current_time,
    strip_line_prefix,
)

__all__ = [
    "classify_severity",
    "classify_source_type",
    "extract_host",
    "extract_timestamp",
    "format_current_time",
    "strip_line_prefix",
]
