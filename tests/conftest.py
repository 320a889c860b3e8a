"""Shared fixtures for FLTR tests."""

from datetime import UTC, datetime
from typing import Any

import pytest

from fltr.models.event import Event

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_event():
    """Factory for events with sensible defaults."""

    def _make(event_id: int, **overrides: Any) -> Event:
        fields = {
            "id": event_id,
            "time": "2025-02-15 03:12:47 UTC",
            "source": "web01",
            "source_type": "log",
            "type": "log",
            "severity": "info",
            "event": f"event {event_id}",
            "detail": "",
            "raw": f"raw {event_id}",
        }
        fields.update(overrides)
        return Event(**fields)

    return _make
