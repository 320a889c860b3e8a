"""Event, LoadedFile and ActiveFilters models for FLTR."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

SeverityLevel = Literal["critical", "high", "medium", "low", "info"]
SourceType = Literal["windows", "linux", "csv", "log"]
IngestFormat = Literal["csv", "log", "evtx"]

# Display order, most urgent first.
SEVERITY_LEVELS: tuple[SeverityLevel, ...] = ("critical", "high", "medium", "low", "info")


class Event(BaseModel):
    """A single normalized timeline entry.

    Every field except ``annotation`` is fixed once the event has been
    produced by a parser.
    """

    id: int = Field(
        ...,
        ge=1,
        description="Session-unique identifier, never reused",
    )

    time: str = Field(
        ...,
        min_length=1,
        description="Display timestamp, canonically 'YYYY-MM-DD HH:MM:SS UTC'",
    )

    source: str = Field(
        ...,
        description="Host or server the event is attributed to",
    )

    source_type: SourceType = Field(
        ...,
        description="Platform classification derived from the file name",
    )

    type: IngestFormat = Field(
        ...,
        description="Ingestion format tag",
    )

    severity: SeverityLevel = Field(
        default="info",
        description="Urgency classification",
    )

    event: str = Field(
        ...,
        min_length=1,
        description="Short human-readable description",
    )

    detail: str = Field(
        default="",
        description="Optional secondary description",
    )

    annotation: str = Field(
        default="",
        description="Analyst note",
    )

    raw: str = Field(
        default="",
        description="Original source line or record, verbatim",
    )

    model_config = {"extra": "forbid"}

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return self.model_dump(mode="json")


class LoadedFile(BaseModel):
    """Provenance record for an ingested file."""

    name: str = Field(..., description="File name as supplied")
    size: int = Field(..., ge=0, description="Size in bytes")
    hash: str = Field(
        ...,
        pattern=r"^[a-f0-9]{64}$",
        description="SHA-256 of the file content",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("hash", mode="before")
    @classmethod
    def validate_lowercase_hash(cls, v: str) -> str:
        """Ensure hash is lowercase."""
        return v.lower() if isinstance(v, str) else v


class ActiveFilters(BaseModel):
    """Analyst-configured visibility constraints.

    ``keywords`` and ``hosts`` restrict nothing while empty. The lists
    hold no duplicates; hosts compare case-insensitively.
    """

    keywords: list[str] = Field(
        default_factory=list,
        description="Required substrings of the event description",
    )

    severities: list[SeverityLevel] = Field(
        default_factory=lambda: list(SEVERITY_LEVELS),
        description="Enabled severity levels",
    )

    hosts: list[str] = Field(
        default_factory=list,
        description="Enabled host identifiers",
    )

    model_config = {"extra": "forbid"}

    def has_host(self, host: str) -> bool:
        """Check whether a host is configured, ignoring case."""
        lowered = host.lower()
        return any(h.lower() == lowered for h in self.hosts)

    def add_host(self, host: str) -> bool:
        """Add a host unless an equal one is present.

        Returns:
            True if the host was added
        """
        if self.has_host(host):
            return False
        self.hosts.append(host)
        return True


class ViewRecord(BaseModel):
    """An entry in the session's event view history."""

    id: int
    event: str
    viewed_at: datetime
