"""Pytest configuration and shared fixtures."""

import tempfile
import zipfile
import zlib
from datetime import datetime
from pathlib import Path
from typing import Callable, Generator

import pytest

from sourcepath.discovery.paths import native_name
from sourcepath.discovery.registry import SourceRegistry
from sourcepath.models import AuditEvent, Mode
from sourcepath.observability.audit import AuditSink
from sourcepath.resources.embedded import EmbeddedResourceTable

# Zip timestamps have two-second resolution
ENTRY_DATE = (2021, 5, 6, 7, 8, 10)
ENTRY_TIMESTAMP = datetime(*ENTRY_DATE).timestamp()


class RecordingAuditSink(AuditSink):
    """AuditSink keeping events in memory."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_jar() -> Callable[..., Path]:
    """Factory writing a .jar archive with the given text entries.

    Entry names ending in "/" become directory entries.
    """
    def _make_jar(path: Path, entries: dict[str, str], date_time=ENTRY_DATE) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, text in entries.items():
                info = zipfile.ZipInfo(name, date_time=date_time)
                zf.writestr(info, text)
        return path

    return _make_jar


@pytest.fixture
def corrupt_jar(make_jar) -> Callable[..., Path]:
    """Factory writing a .jar whose single entry has damaged deflate data.

    The archive itself opens and lists normally; only reading the entry fails.
    """
    def _corrupt_jar(path: Path, name: str) -> Path:
        text = "".join(f"(def x{i} {i * 7919})\n" for i in range(500))
        make_jar(path, {name: text})
        data = bytearray(path.read_bytes())
        start = 30 + len(name.encode("utf-8")) + 4
        for offset in range(start, start + 20):
            data[offset] ^= 0xFF
        path.write_bytes(bytes(data))
        return path

    return _corrupt_jar


@pytest.fixture
def make_dir() -> Callable[..., Path]:
    """Factory writing a directory tree with the given text files."""
    def _make_dir(root: Path, files: dict[str, str]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for name, text in files.items():
            target = root / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return root

    return _make_dir


@pytest.fixture
def registry() -> SourceRegistry:
    """Registry without the working directory seeded."""
    return SourceRegistry(seed_cwd=False)


@pytest.fixture
def dev_table(tmp_path: Path) -> EmbeddedResourceTable:
    """Development-mode table over an empty build-output directory."""
    return EmbeddedResourceTable(mode=Mode.DEVELOPMENT, dev_dir=tmp_path / "target")


@pytest.fixture
def packaged_table() -> Callable[..., EmbeddedResourceTable]:
    """Factory building a packaged table from plain text resources."""
    def _packaged_table(resources: dict[str, str], built_at: float = 0.0) -> EmbeddedResourceTable:
        compressed = {
            native_name(name): zlib.compress(text.encode("utf-8")) for name, text in resources.items()
        }
        return EmbeddedResourceTable(mode=Mode.PACKAGED, resources=compressed, built_at=built_at)

    return _packaged_table


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def entry_timestamp() -> float:
    """POSIX timestamp of entries written by make_jar."""
    return ENTRY_TIMESTAMP
