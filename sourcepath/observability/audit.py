"""Audit logging interfaces and implementations for sourcepath.

This module provides the AuditSink abstract interface for recording resolver
operations, along with concrete implementations for different backends.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from sourcepath.models import AuditEvent


class AuditSink(ABC):
    """Abstract interface for audit logging.

    AuditSink defines the contract for recording events from resolution,
    reads, manifest collection and cache operations. Implementations can
    write to different backends (files, stdout, in-memory lists, etc.).

    Locations skipped during a search because they failed (corrupt archive,
    permission denied) are recorded as "skip" events, which is the only place
    such failures become visible.
    """

    @abstractmethod
    def log(self, event: AuditEvent) -> None:
        """Record an audit event.

        Args:
            event: The AuditEvent to record
        """
        pass


class JSONLAuditSink(AuditSink):
    """Writes audit events to a JSONL (JSON Lines) file.

    Each event is serialized as a single JSON line and appended to the file.

    Example log file content:
        {"ts":"2024-01-01T12:00:00","kind":"resolve","name":"clojure/core.cljs",...}
        {"ts":"2024-01-01T12:00:01","kind":"skip","name":"foo.cljs","location":"/lib/bad.jar",...}
    """

    def __init__(self, log_path: Path):
        """Initialize with log file path.

        Args:
            log_path: Path to the JSONL log file. Parent directories are created
                     if they don't exist.
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: AuditEvent) -> None:
        """Append audit event as a JSON line to the log file."""
        json_line = json.dumps(event.to_dict(), separators=(',', ':'))
        with open(self.log_path, 'a', encoding='utf-8') as f:
            f.write(json_line + '\n')


class StdoutAuditSink(AuditSink):
    """Writes audit events to stdout as JSON lines."""

    def log(self, event: AuditEvent) -> None:
        print(json.dumps(event.to_dict(), separators=(',', ':')))


def emit(
    sink: AuditSink | None,
    kind: str,
    name: str,
    location: str | None = None,
    **detail,
) -> None:
    """Build an AuditEvent and hand it to sink, if there is one."""
    if sink is None:
        return
    sink.log(
        AuditEvent(
            ts=datetime.now(),
            kind=kind,
            name=name,
            location=location,
            detail=detail,
        )
    )
