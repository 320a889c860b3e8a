"""Tests for filter presets and bootstrap event files."""

import pytest

from fltr.core.errors import ConfigFileError
from fltr.core.presets import load_bootstrap, load_preset, parse_preset
from fltr.models.event import SEVERITY_LEVELS


class TestPresets:
    def test_load_preset(self, tmp_path):
        path = tmp_path / "triage.yaml"
        path.write_text(
            "keywords: [failed, failed, sudo]\n"
            "severities: [critical, high]\n"
            "hosts: [WEB01, web01, db01]\n",
            encoding="utf-8",
        )

        filters = load_preset(path)

        assert filters.keywords == ["failed", "sudo"]
        assert filters.severities == ["critical", "high"]
        assert filters.hosts == ["WEB01", "db01"]

    def test_missing_keys_keep_defaults(self):
        filters = parse_preset({"keywords": ["sudo"]})
        assert filters.severities == list(SEVERITY_LEVELS)
        assert filters.hosts == []

    def test_empty_preset(self):
        assert parse_preset(None).keywords == []

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"severities": ["urgent"]},
            {"colour": "red"},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ConfigFileError) as exc_info:
            parse_preset(data)
        assert exc_info.value.error.code == "INVALID_FORMAT"

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("keywords: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigFileError):
            load_preset(path)


class TestBootstrap:
    def test_load_bootstrap_json(self, tmp_path):
        path = tmp_path / "sample.json"
        path.write_text(
            '[{"id": 1, "time": "2025-02-15 03:12:47 UTC", "source": "dc-01",'
            ' "source_type": "windows", "type": "evtx", "severity": "high",'
            ' "event": "Sample event"}]',
            encoding="utf-8",
        )

        [event] = load_bootstrap(path)

        assert event.source == "dc-01"
        assert event.annotation == ""

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "sample.yaml"
        path.write_text(
            "- {id: 1, time: t, source: a, source_type: log, type: log, event: x}\n"
            "- {id: 1, time: t, source: b, source_type: log, type: log, event: y}\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigFileError):
            load_bootstrap(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "sample.yaml"
        path.write_text("id: 1\n", encoding="utf-8")
        with pytest.raises(ConfigFileError):
            load_bootstrap(path)
