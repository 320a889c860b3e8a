"""Pydantic models for FLTR."""

from fltr.models.error import ErrorCode, StructuredError
from fltr.models.event import (
    SEVERITY_LEVELS,
    ActiveFilters,
    Event,
    LoadedFile,
    ViewRecord,
)

__all__ = [
    "SEVERITY_LEVELS",
    "ActiveFilters",
    "ErrorCode",
    "Event",
    "LoadedFile",
    "StructuredError",
    "ViewRecord",
]
