"""Resolver session: the entry point tying the components together.

A ResourceSession owns one source registry and one embedded resource table,
and wires them to a locator, a content reader, a manifest aggregator, an
artifact cache and a completion bridge. Sessions share no state, so several
can coexist in one process (e.g. one per runtime instance, or per test).
"""

from pathlib import Path
from typing import Iterable, Optional

from sourcepath.adapters.completion import CompletionBridge
from sourcepath.discovery.cache import ArtifactCache
from sourcepath.discovery.registry import SourceRegistry
from sourcepath.models import (
    ManifestMatch,
    Mode,
    ResolverConfig,
    ResourceDescriptor,
    SourceContent,
)
from sourcepath.observability.audit import AuditSink, emit
from sourcepath.resources.aggregator import ManifestAggregator
from sourcepath.resources.embedded import EmbeddedResourceTable
from sourcepath.resources.locator import ResourceLocator
from sourcepath.resources.reader import ContentReader


class ResourceSession:
    """Resolves and reads resources for one runtime session.

    Example:
        >>> session = ResourceSession.from_config(ResolverConfig(
        ...     source_paths=["~/lib/clojurescript.jar", "src"],
        ... ))
        >>> descriptor = session.resolve("clojure/string.cljs")
        >>> content = session.read(descriptor) if descriptor else None
        >>> deps = session.collect_manifest(["deps.cljs"])
    """

    def __init__(
        self,
        registry: SourceRegistry | None = None,
        embedded: EmbeddedResourceTable | None = None,
        cache: ArtifactCache | None = None,
        completion: CompletionBridge | None = None,
        audit_sink: AuditSink | None = None,
    ):
        """Initialize session from explicit components.

        Args:
            registry: Source registry; defaults to one seeded with the cwd
            embedded: Embedded resource table; defaults to an empty
                      DEVELOPMENT-mode table over ./target
            cache: Artifact cache; defaults to cwd-relative keys
            completion: Completion bridge; defaults to rlcompleter
            audit_sink: Optional AuditSink. If None, auditing is disabled.
        """
        self.registry = registry if registry is not None else SourceRegistry()
        self.embedded = embedded if embedded is not None else EmbeddedResourceTable()
        self.cache = cache or ArtifactCache()
        self.completion = completion or CompletionBridge()
        self._audit_sink = audit_sink

        self.locator = ResourceLocator(self.registry, self.embedded, audit_sink)
        self.reader = ContentReader(self.embedded, audit_sink)
        self.aggregator = ManifestAggregator(self.registry, audit_sink)

    @classmethod
    def from_config(
        cls,
        config: ResolverConfig,
        resources: dict[str, bytes] | None = None,
        audit_sink: AuditSink | None = None,
    ) -> "ResourceSession":
        """Build a session from a ResolverConfig.

        Args:
            config: Session configuration
            resources: Optional in-memory embedded table (name -> compressed
                       bytes); takes priority over config.embedded_root
            audit_sink: Optional AuditSink

        Returns:
            Configured ResourceSession
        """
        registry = SourceRegistry(
            paths=config.source_paths,
            archive_suffixes=config.archive_suffixes,
            seed_cwd=config.seed_cwd,
        )

        if resources is None and config.mode is Mode.PACKAGED and config.embedded_root:
            embedded = EmbeddedResourceTable.from_directory(
                Path(config.embedded_root).expanduser(),
                mode=config.mode,
                dev_dir=config.dev_dir,
                built_at=config.embedded_built_at,
            )
        else:
            embedded = EmbeddedResourceTable(
                mode=config.mode,
                resources=resources,
                dev_dir=config.dev_dir,
                built_at=config.embedded_built_at,
            )

        cache_dir = Path(config.cache_dir) if config.cache_dir else None
        return cls(
            registry=registry,
            embedded=embedded,
            cache=ArtifactCache(cache_dir),
            audit_sink=audit_sink,
        )

    # Source paths

    def add_source_paths(self, paths: Iterable[str | Path]) -> None:
        self.registry.add(paths)

    def remove_source_path(self, path: str | Path) -> bool:
        return self.registry.remove(path)

    def source_paths(self) -> list[str]:
        return self.registry.list()

    # Resolution and reading

    def resolve(self, name: str) -> Optional[ResourceDescriptor]:
        """Resolve a name to a descriptor (embedded first, then registry order)."""
        return self.locator.resolve(name)

    def read(self, descriptor: ResourceDescriptor) -> Optional[SourceContent]:
        """Read the content a descriptor points at.

        Raises:
            ResourceReadError: If a resolved file or archive entry cannot be read
        """
        return self.reader.read(descriptor)

    def read_source(self, name: str) -> Optional[SourceContent]:
        """Search the registry and read in one pass (embedded table ignored)."""
        return self.locator.read_source(name)

    def read_file(self, path: str | Path) -> Optional[SourceContent]:
        return self.reader.read_file(path)

    def read_archive_entry(self, archive_path: str | Path, entry_name: str) -> str:
        return self.reader.read_archive_entry(archive_path, entry_name)

    # Embedded resources

    def is_bundled(self, name: str) -> bool:
        return self.embedded.is_bundled(name)

    def load_bundled(self, name: str) -> Optional[str]:
        return self.embedded.load(name)

    def export_embedded(self, outdir: str | Path) -> list[Path]:
        """Write every embedded resource under outdir."""
        written = self.embedded.export_to(outdir)
        emit(self._audit_sink, "export", str(outdir), files=len(written))
        return written

    # Manifests

    def collect_manifest(self, filenames: Iterable[str]) -> list[ManifestMatch]:
        """Collect a manifest file from every source location, in registry order."""
        return self.aggregator.collect_manifest(filenames)

    def upstream_foreign_libs(self) -> list[str]:
        return self.aggregator.upstream_foreign_libs()

    def upstream_data_readers(self) -> list[ManifestMatch]:
        return self.aggregator.upstream_data_readers()

    def list_archive_entries(self, archive_path: str | Path, prefix: str) -> list[str]:
        return self.aggregator.list_archive_entries(archive_path, prefix)

    # Collaborators

    def read_cache(self, path: str | Path) -> Optional[SourceContent]:
        content = self.cache.read(path)
        emit(self._audit_sink, "cache", str(path), operation="read", hit=content is not None)
        return content

    def write_cache(self, path: str | Path, text: str) -> Optional[OSError]:
        error = self.cache.write(path, text)
        emit(self._audit_sink, "cache", str(path), operation="write", ok=error is None)
        return error

    def complete(self, line: str, match: str) -> list[str]:
        return self.completion.complete(line, match)

    def __repr__(self) -> str:
        return f"ResourceSession(paths={self.source_paths()!r}, embedded={self.embedded!r})"
