"""Tests for severity and source-type classification."""

import pytest

from fltr.models.event import SEVERITY_LEVELS
from fltr.normalizer.classify import (
    SEVERITY_RULES,
    classify_severity,
    classify_source_type,
    file_extension,
)


class TestClassifySeverity:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Failed password for root", "critical"),
            ("Access DENIED for user bob", "critical"),
            ("malware signature matched", "critical"),
            ("WARNING: disk almost full", "high"),
            ("suspicious login pattern", "high"),
            ("firewall deny rule hit", "high"),
            ("privilege escalation attempt", "high"),
            ("notice: configuration reloaded", "medium"),
            ("requires attention", "medium"),
            ("debug trace enabled", "low"),
            ("Information only", "low"),
            ("something happened", "info"),
            ("", "info"),
        ],
    )
    def test_keyword_levels(self, text, expected):
        assert classify_severity(text) == expected

    def test_critical_wins_over_high(self):
        # "failed" appears in both rule sets
        assert classify_severity("login failed, warning issued") == "critical"

    def test_medium_wins_over_low(self):
        assert classify_severity("notice with debug output") == "medium"

    def test_case_insensitive(self):
        assert classify_severity("ERROR") == classify_severity("error") == "critical"

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "\x00\x01", "ünïcødé", "12345", "a" * 5000, "high", "low"],
    )
    def test_total(self, text):
        assert classify_severity(text) in SEVERITY_LEVELS

    def test_rules_in_descending_urgency(self):
        assert [severity for _, severity in SEVERITY_RULES] == [
            "critical",
            "high",
            "medium",
            "low",
        ]


class TestClassifySourceType:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("dump.evtx", "windows"),
            ("Security.evtx", "windows"),
            ("SYSTEM.log", "windows"),
            ("application_errors.txt", "windows"),
            ("events.csv", "windows"),
            ("data.csv", "csv"),
            ("DATA.CSV", "csv"),
            ("export_csv.txt", "csv"),
            ("auth.log", "log"),
            ("nginx_access.txt", "log"),
            ("syslog", "log"),
            ("notes.txt", "log"),
            ("output.txt", "log"),
            ("capture.bin", "log"),
            ("noextension", "log"),
        ],
    )
    def test_precedence(self, filename, expected):
        assert classify_source_type(filename) == expected

    @pytest.mark.parametrize("filename", ["", ".", "a.b.c", "weird name.EVTX.bak"])
    def test_total(self, filename):
        assert classify_source_type(filename) in {"windows", "linux", "csv", "log"}


class TestFileExtension:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("a.CSV", "csv"),
            ("archive.tar.log", "log"),
            ("syslog", "syslog"),
        ],
    )
    def test_last_segment(self, filename, expected):
        assert file_extension(filename) == expected
