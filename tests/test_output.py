"""Tests for CLI output rendering."""

import io
import json

from fltr.cli.output import CliRenderer, OutputFormatter, output, write_timeline_table
from fltr.models.error import ErrorCode, StructuredError


class TestTimelineTable:
    def test_empty(self):
        file = io.StringIO()
        write_timeline_table([], file)
        assert file.getvalue() == "No events match your filters.\n"

    def test_rows_and_end_marker(self, make_event):
        file = io.StringIO()
        events = [
            make_event(1, event="Failed login", severity="critical", annotation="check"),
            make_event(2, event="x" * 80),
        ]
        write_timeline_table(events, file)

        lines = file.getvalue().splitlines()
        assert lines[0].startswith("ID")
        assert "CRITICAL" in lines[2]
        assert lines[2].endswith("check")
        assert "x" * 57 + "..." in lines[3]
        assert lines[-1] == "-- end of timeline (2 events) --"

    def test_whitespace_collapsed(self, make_event):
        file = io.StringIO()
        write_timeline_table([make_event(1, event="first\u2028second\tthird")], file)
        assert "first second third" in file.getvalue()


class TestFormatter:
    def test_jsonl_stream(self, make_event, capsys):
        OutputFormatter("jsonl").stream([make_event(1), make_event(2)])
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line)["id"] for line in lines] == [1, 2]

    def test_renderer_prints_last_render_only(self, make_event, capsys):
        renderer = CliRenderer(OutputFormatter("json"))
        renderer.render([make_event(1)])
        renderer.render([make_event(1), make_event(2)])
        renderer.flush()
        assert [e["id"] for e in json.loads(capsys.readouterr().out)] == [1, 2]

    def test_human_error_summary(self):
        file = io.StringIO()
        error = StructuredError(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found: 99",
            remediation="List events with fltr timeline",
            retryable=False,
        )
        output(error, format="human", file=file)
        assert "message: Event not found: 99" in file.getvalue()
