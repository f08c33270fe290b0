"""Collection of manifest files contributed by every source location."""

import logging
import os
from pathlib import Path
from typing import Iterable

from sourcepath.discovery.registry import SourceRegistry
from sourcepath.exceptions import ArchiveReadError
from sourcepath.models import ManifestMatch, ProbeResult, SourceLocation
from sourcepath.observability.audit import AuditSink, emit
from sourcepath.resources import archive

logger = logging.getLogger(__name__)

FOREIGN_LIBS_MANIFEST = "deps.cljs"
DATA_READERS_MANIFESTS = ("data_readers.cljs", "data_readers.cljc")


class ManifestAggregator:
    """Gathers manifest files from all registered locations.

    Unlike resource resolution, nothing here is shadowed by precedence:
    libraries on the path each contribute their own manifest (dependency
    declarations, data reader tables) and callers merge them all.
    """

    def __init__(self, registry: SourceRegistry, audit_sink: AuditSink | None = None):
        self.registry = registry
        self._audit_sink = audit_sink

    def collect_manifest(self, filenames: Iterable[str]) -> list[ManifestMatch]:
        """Read every occurrence of the given manifest files.

        Locations are visited in registry order and, within a location,
        filenames in the order given. Locations that lack a file or fail to
        read are skipped.

        Args:
            filenames: Manifest file names (e.g. ["deps.cljs"])

        Returns:
            One ManifestMatch per (location, filename) that was read
        """
        filenames = list(filenames)
        matches = []
        for location in self.registry.locations():
            for filename in filenames:
                probe = self._probe(location, filename)
                if probe.ok:
                    matches.append(probe.value)
                elif probe.error is not None:
                    logger.debug(f"[manifest] skipping {location.path} for {filename}: {probe.error}")
                    emit(self._audit_sink, "skip", filename, location.path, error=str(probe.error))

        emit(self._audit_sink, "manifest", ",".join(filenames), matches=len(matches))
        return matches

    def upstream_foreign_libs(self) -> list[str]:
        """Return the text of every foreign library manifest on the path."""
        return [match.text for match in self.collect_manifest([FOREIGN_LIBS_MANIFEST])]

    def upstream_data_readers(self) -> list[ManifestMatch]:
        """Return every data reader table on the path."""
        return self.collect_manifest(DATA_READERS_MANIFESTS)

    def list_archive_entries(self, archive_path: str | Path, prefix: str) -> list[str]:
        """List file entries of an archive whose names start with prefix.

        Raises:
            ArchiveReadError: If the archive cannot be read
        """
        return archive.list_entries(archive_path, prefix)

    def _probe(self, location: SourceLocation, filename: str) -> ProbeResult:
        if location.is_archive:
            try:
                hit = archive.read_entry_text(location.path, filename)
            except ArchiveReadError as e:
                return ProbeResult.failed(location, e)
            if hit is None:
                return ProbeResult.not_found(location)
            return ProbeResult.found(location, ManifestMatch(location.path, filename, hit[0]))

        file_path = os.path.join(location.path, filename)
        try:
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                text = f.read()
        except FileNotFoundError:
            return ProbeResult.not_found(location)
        except (OSError, ValueError, UnicodeDecodeError) as e:
            return ProbeResult.failed(location, e)
        return ProbeResult.found(location, ManifestMatch(location.path, filename, text))
