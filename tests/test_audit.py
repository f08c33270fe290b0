"""Unit tests for AuditSink interface."""

import json
from datetime import datetime

import pytest

from sourcepath.models import AuditEvent
from sourcepath.observability.audit import AuditSink, JSONLAuditSink, StdoutAuditSink, emit


class ConcreteAuditSink(AuditSink):
    """Concrete implementation of AuditSink for testing."""

    def __init__(self):
        self.events = []

    def log(self, event: AuditEvent) -> None:
        """Record event in memory."""
        self.events.append(event)


class TestAuditSink:
    """Tests for AuditSink abstract interface."""

    def test_abstract_interface(self):
        """Test that AuditSink cannot be instantiated directly."""
        with pytest.raises(TypeError):
            AuditSink()

    def test_log_method_required(self):
        with pytest.raises(TypeError):
            class IncompleteAuditSink(AuditSink):
                pass
            IncompleteAuditSink()

    def test_log_skip_event(self):
        sink = ConcreteAuditSink()
        event = AuditEvent(
            ts=datetime.now(),
            kind="skip",
            name="cljs/core.cljs",
            location="/lib/broken.jar",
            detail={"error": "File is not a zip file"},
        )

        sink.log(event)

        assert len(sink.events) == 1
        assert sink.events[0].location == "/lib/broken.jar"


class TestEmit:
    """Tests for the emit() helper."""

    def test_builds_event(self):
        sink = ConcreteAuditSink()

        emit(sink, "resolve", "foo.cljs", "/src", source="file")

        (event,) = sink.events
        assert event.kind == "resolve"
        assert event.name == "foo.cljs"
        assert event.location == "/src"
        assert event.detail == {"source": "file"}
        assert isinstance(event.ts, datetime)

    def test_no_sink_is_noop(self):
        emit(None, "resolve", "foo.cljs")


class TestJSONLAuditSink:
    """Tests for JSONLAuditSink."""

    def test_creates_parent_directories(self, tmp_path):
        log_path = tmp_path / "logs" / "audit.jsonl"

        JSONLAuditSink(log_path)

        assert log_path.parent.is_dir()

    def test_appends_json_lines(self, tmp_path):
        log_path = tmp_path / "audit.jsonl"
        sink = JSONLAuditSink(log_path)

        emit(sink, "resolve", "a.cljs", "/src", source="file")
        emit(sink, "manifest", "deps.cljs", matches=2)

        lines = log_path.read_text().splitlines()
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first["kind"] == "resolve"
        assert first["location"] == "/src"
        assert json.loads(lines[1])["detail"] == {"matches": 2}

    def test_lines_round_trip(self, tmp_path):
        log_path = tmp_path / "audit.jsonl"
        sink = JSONLAuditSink(log_path)
        event = AuditEvent(ts=datetime(2024, 1, 1, 12, 0), kind="read", name="a.cljs")

        sink.log(event)

        assert AuditEvent.from_dict(json.loads(log_path.read_text())) == event


class TestStdoutAuditSink:
    """Tests for StdoutAuditSink."""

    def test_prints_json_line(self, capsys):
        emit(StdoutAuditSink(), "cache", "out.js", operation="write", ok=True)

        data = json.loads(capsys.readouterr().out)
        assert data["kind"] == "cache"
        assert data["detail"] == {"operation": "write", "ok": True}
