"""Tests for the timeline session: ingestion, filter editing and views."""

import asyncio
import hashlib

import pytest

from fltr.core.errors import EventNotFoundError, ValidationError
from fltr.core.session import TimelineSession

from tests.conftest import FIXED_NOW

AUTH_LOG = (
    b"2025-02-15T03:12:47 sshd[123]: Failed password for root from 10.0.0.5\n"
    b"2025-02-15T03:13:02 sshd[123]: Accepted password for root from 10.0.0.5\n"
    b"Feb 15 03:20:00 web01 cron[1]: job host=WEB01 finished\n"
)

EVENTS_CSV = (
    b"timestamp,source,severity,event,detail\n"
    b"2025-02-15 03:00:00,web01,critical,Failed login,user=admin\n"
    b"2025-02-15 03:05:00,db01,notice,Backup started,\n"
)


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, events):
        self.calls.append([e.id for e in events])


@pytest.fixture
def messages():
    return []


@pytest.fixture
def session(messages):
    return TimelineSession(
        renderer=RecordingRenderer(),
        notifier=messages.append,
        clock=lambda: FIXED_NOW,
    )


class TestIngestion:
    def test_ids_continue_across_files(self, session):
        first = asyncio.run(session.load_bytes("auth.log", AUTH_LOG))
        second = asyncio.run(session.load_bytes("events.csv", EVENTS_CSV))

        assert first.ok and second.ok
        assert first.events_loaded == 3
        assert second.events_loaded == 2
        assert [e.id for e in session.store.events] == [1, 2, 3, 4, 5]

    def test_loaded_file_provenance(self, session):
        report = asyncio.run(session.load_bytes("auth.log", AUTH_LOG))

        digest = hashlib.sha256(AUTH_LOG).hexdigest()
        assert report.hash == digest
        [loaded] = session.store.loaded_files
        assert loaded.name == "auth.log"
        assert loaded.size == len(AUTH_LOG)
        assert loaded.hash == digest

    def test_hosts_auto_added_once_ignoring_case(self, session):
        asyncio.run(session.load_bytes("events.csv", EVENTS_CSV))
        asyncio.run(session.load_bytes(
            "more.csv", b"2025-02-15 04:00:00,WEB01,info,Heartbeat\n"
        ))
        assert session.filters.hosts == ["web01", "db01"]

    def test_renderer_and_notifier_called(self, session, messages):
        asyncio.run(session.load_bytes("events.csv", EVENTS_CSV))
        assert session.renderer.calls[-1] == [1, 2]
        assert messages == ["Loaded 2 events from events.csv"]

    def test_severity_counts_sum_to_total(self, session):
        asyncio.run(session.load_bytes("auth.log", AUTH_LOG))
        asyncio.run(session.load_bytes("Security.evtx", b""))
        counts = session.severity_counts()
        assert sum(counts.values()) == len(session.store) == 8

    def test_failed_file_does_not_block_others(self, session, messages, tmp_path):
        good = tmp_path / "auth.log"
        good.write_bytes(AUTH_LOG)
        missing = tmp_path / "missing.log"

        reports = asyncio.run(session.load_paths([missing, good]))

        assert not reports[0].ok
        assert reports[0].error.code == "IO_ERROR"
        assert reports[1].ok
        assert [e.id for e in session.store.events] == [1, 2, 3]
        assert [f.name for f in session.store.loaded_files] == ["auth.log"]
        assert messages[0] == "Error processing missing.log"

    def test_concurrent_loads_are_serialized(self, session):
        async def load_both():
            return await asyncio.gather(
                session.load_bytes("auth.log", AUTH_LOG),
                session.load_bytes("events.csv", EVENTS_CSV),
            )

        asyncio.run(load_both())

        all_ids = [e.id for e in session.store.events]
        assert sorted(all_ids) == [1, 2, 3, 4, 5]
        assert len(set(all_ids)) == len(all_ids)


class TestFilterEditing:
    @pytest.fixture(autouse=True)
    def loaded(self, session):
        asyncio.run(session.load_bytes("events.csv", EVENTS_CSV))

    def test_keywords(self, session):
        assert [e.id for e in session.add_keyword("backup")] == [1, 2]
        assert [e.id for e in session.set_search("zzz")] == [2]
        session.set_search("")
        session.add_keyword("backup")
        assert session.filters.keywords == ["backup"]
        assert [e.id for e in session.remove_keyword("backup")] == [1, 2]

    def test_search(self, session):
        assert [e.id for e in session.set_search("ADMIN")] == [1]
        assert session.renderer.calls[-1] == [1]

    def test_set_severities_validates(self, session):
        with pytest.raises(ValidationError):
            session.set_severities(["critical", "urgent"])
        assert len(session.filters.severities) == 5

    def test_toggle_severity(self, session):
        assert [e.id for e in session.toggle_severity("critical")] == [2]
        assert "critical" not in session.filters.severities
        assert [e.id for e in session.toggle_severity("critical")] == [1, 2]

    def test_toggle_all_hosts(self, session):
        session.toggle_all_hosts()
        assert session.filters.hosts == []
        session.toggle_all_hosts()
        assert sorted(session.filters.hosts) == ["db01", "web01"]

    def test_set_hosts(self, session):
        assert [e.id for e in session.set_hosts(["DB01"])] == [2]


class TestEvents:
    @pytest.fixture(autouse=True)
    def loaded(self, session):
        asyncio.run(session.load_bytes("events.csv", EVENTS_CSV))

    def test_set_annotation(self, session):
        session.set_annotation(1, "brute force start")
        assert session.store.get(1).annotation == "brute force start"
        assert session.store.annotation_count() == 1

    def test_view_event_records_history(self, session):
        event, record = session.view_event(2)
        assert event.event == "Backup started"
        assert record.viewed_at == FIXED_NOW
        assert [r.id for r in session.view_history] == [2]

    def test_view_unknown_event(self, session):
        with pytest.raises(EventNotFoundError):
            session.view_event(99)

    def test_export_ignores_filters(self, session):
        session.set_severities(["critical"])
        lines = session.export_csv().splitlines()
        assert lines[0] == "Time,Source,Severity,Event,Detail,Annotation"
        assert len(lines) == 3

    def test_clear_and_reset(self, session):
        session.clear()
        assert len(session.store) == 0
        assert session.renderer.calls[-1] == []
        asyncio.run(session.load_bytes("events.csv", EVENTS_CSV))
        assert [e.id for e in session.store.events] == [1, 2]
        session.reset()
        assert session.store.loaded_files == []
