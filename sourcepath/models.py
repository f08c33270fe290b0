"""Data models for sourcepath."""

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class Mode(Enum):
    """How the embedded resource table is served."""
    PACKAGED = "packaged"
    DEVELOPMENT = "development"


class SourceKind(Enum):
    """Kind of a registered source location."""
    DIRECTORY = "directory"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class SourceLocation:
    """A registered place to search for resources."""
    path: str
    kind: SourceKind

    @property
    def is_archive(self) -> bool:
        return self.kind is SourceKind.ARCHIVE

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {"path": self.path, "kind": self.kind.value}


@dataclass(frozen=True)
class BundledResource:
    """Resource served from the embedded resource table."""
    name: str

    def to_dict(self) -> dict:
        return {"type": "bundled", "src": self.name}


@dataclass(frozen=True)
class FileResource:
    """Resource stored as a plain file under a directory location."""
    path: str

    def to_dict(self) -> dict:
        return {"type": "file", "src": self.path}


@dataclass(frozen=True)
class ArchiveResource:
    """Resource stored as an entry inside an archive location."""
    archive_path: str
    entry_name: str
    entry_timestamp: float

    def to_dict(self) -> dict:
        return {
            "type": "jar",
            "jar_path": self.archive_path,
            "src": self.entry_name,
            "date": self.entry_timestamp,
        }


ResourceDescriptor = Union[BundledResource, FileResource, ArchiveResource]


def descriptor_from_dict(data: dict) -> ResourceDescriptor:
    """Deserialize a descriptor from its tagged dict form.

    Raises:
        ValueError: If the type tag is unknown
    """
    kind = data.get("type")
    if kind == "bundled":
        return BundledResource(name=data["src"])
    if kind == "file":
        return FileResource(path=data["src"])
    if kind == "jar":
        return ArchiveResource(
            archive_path=data["jar_path"],
            entry_name=data["src"],
            entry_timestamp=data.get("date", 0.0),
        )
    raise ValueError(f"Unknown resource descriptor type: {kind!r}")


@dataclass(frozen=True)
class SourceContent:
    """Text of a resource and its modification time (POSIX seconds)."""
    text: str
    modified_at: float

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {"source": self.text, "modified": self.modified_at}


@dataclass(frozen=True)
class ManifestMatch:
    """One occurrence of a manifest file in a source location."""
    origin_location: str
    filename: str
    text: str

    @property
    def url(self) -> str:
        return os.path.join(self.origin_location, self.filename)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "origin_location": self.origin_location,
            "filename": self.filename,
            "url": self.url,
            "source": self.text,
        }


class ProbeStatus(Enum):
    """Outcome of probing one source location."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class ProbeResult:
    """Result of probing a single location during a multi-location search.

    Only FOUND stops a search. NOT_FOUND and FAILED both move on to the next
    location, but FAILED carries the error so it can be logged and audited.
    """
    location: SourceLocation
    status: ProbeStatus
    value: Any = None
    error: Exception | None = None

    @classmethod
    def found(cls, location: SourceLocation, value: Any) -> "ProbeResult":
        return cls(location, ProbeStatus.FOUND, value=value)

    @classmethod
    def not_found(cls, location: SourceLocation) -> "ProbeResult":
        return cls(location, ProbeStatus.NOT_FOUND)

    @classmethod
    def failed(cls, location: SourceLocation, error: Exception) -> "ProbeResult":
        return cls(location, ProbeStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.FOUND


@dataclass
class AuditEvent:
    """Record of a resolver operation."""
    ts: datetime
    kind: str  # "resolve", "read", "skip", "manifest", "cache", "export"
    name: str
    location: str | None = None
    detail: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "ts": self.ts.isoformat(),
            "kind": self.kind,
            "name": self.name,
            "location": self.location,
            "detail": self.detail,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEvent":
        """Deserialize from dict."""
        return cls(
            ts=datetime.fromisoformat(data["ts"]),
            kind=data["kind"],
            name=data["name"],
            location=data.get("location"),
            detail=data.get("detail", {}),
        )


@dataclass
class ResolverConfig:
    """Configuration for a resolver session."""
    mode: Mode = Mode.DEVELOPMENT
    source_paths: list[str] = field(default_factory=list)
    archive_suffixes: tuple[str, ...] = (".jar",)
    dev_dir: str = "target"
    embedded_root: str | None = None
    embedded_built_at: float = 0.0
    cache_dir: str | None = None
    seed_cwd: bool = True

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "mode": self.mode.value,
            "source_paths": list(self.source_paths),
            "archive_suffixes": list(self.archive_suffixes),
            "dev_dir": self.dev_dir,
            "embedded_root": self.embedded_root,
            "embedded_built_at": self.embedded_built_at,
            "cache_dir": self.cache_dir,
            "seed_cwd": self.seed_cwd,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResolverConfig":
        """Deserialize from dict.

        Raises:
            ValueError: If mode is not a known Mode value
        """
        return cls(
            mode=Mode(data.get("mode", Mode.DEVELOPMENT.value)),
            source_paths=[str(p) for p in data.get("source_paths", [])],
            archive_suffixes=tuple(data.get("archive_suffixes", [".jar"])),
            dev_dir=str(data.get("dev_dir", "target")),
            embedded_root=data.get("embedded_root"),
            embedded_built_at=float(data.get("embedded_built_at", 0.0)),
            cache_dir=data.get("cache_dir"),
            seed_cwd=bool(data.get("seed_cwd", True)),
        )
