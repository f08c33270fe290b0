"""Resource location: turning a name into a descriptor of where it lives."""

import logging
import os
from typing import Optional

from sourcepath.discovery.registry import SourceRegistry
from sourcepath.exceptions import ArchiveReadError
from sourcepath.models import (
    ArchiveResource,
    BundledResource,
    FileResource,
    ProbeResult,
    ProbeStatus,
    ResourceDescriptor,
    SourceContent,
    SourceLocation,
)
from sourcepath.observability.audit import AuditSink, emit
from sourcepath.resources import archive
from sourcepath.resources.embedded import EmbeddedResourceTable

logger = logging.getLogger(__name__)


class ResourceLocator:
    """Searches the embedded table and the registry for a resource name.

    Resolution order (first match wins):
    1. Embedded resource table
    2. Registered source locations, in registration order

    Locations that fail while being probed (corrupt archive, permission
    denied, file deleted mid-search) never abort a search. They produce a
    FAILED probe, which is logged at debug level and audited as a "skip"
    event before moving on.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        embedded: EmbeddedResourceTable,
        audit_sink: AuditSink | None = None,
    ):
        self.registry = registry
        self.embedded = embedded
        self._audit_sink = audit_sink

    def resolve(self, name: str) -> Optional[ResourceDescriptor]:
        """Find where a resource lives without reading it.

        A directory hit only checks that ``<location>/<name>`` exists; whether
        it is readable is left to the ContentReader.

        Args:
            name: Relative resource name (e.g. "clojure/core.cljs")

        Returns:
            BundledResource, ArchiveResource or FileResource, or None if no
            source has the name
        """
        if self.embedded.is_bundled(name):
            emit(self._audit_sink, "resolve", name, source="bundled")
            return BundledResource(name)

        for location in self.registry.locations():
            probe = self._probe_descriptor(location, name)
            if probe.ok:
                emit(self._audit_sink, "resolve", name, location.path,
                     source=probe.value.to_dict()["type"])
                return probe.value
            self._note_skip(probe, name)

        emit(self._audit_sink, "resolve", name, found=False)
        return None

    def read_source(self, name: str) -> Optional[SourceContent]:
        """Search the registry and read the first hit in one pass.

        The embedded table is not consulted. Archive locations that miss or
        fail are skipped. The first directory location reached ends the
        search: its read result is returned as is, content on success and
        None on failure, and no later location is tried.

        Args:
            name: Relative resource name

        Returns:
            SourceContent of the hit, or None
        """
        for location in self.registry.locations():
            if location.is_archive:
                probe = self._probe_archive_content(location, name)
                if probe.ok:
                    emit(self._audit_sink, "read", name, location.path)
                    return probe.value
                self._note_skip(probe, name)
                continue

            file_path = os.path.join(location.path, name)
            try:
                with open(file_path, "r", encoding="utf-8", newline="") as f:
                    text = f.read()
                modified = os.stat(file_path).st_mtime
            except (OSError, ValueError, UnicodeDecodeError) as e:
                logger.debug(f"[read_source] {name} not readable in {location.path}: {e}")
                emit(self._audit_sink, "read", name, location.path, found=False)
                return None
            emit(self._audit_sink, "read", name, location.path)
            return SourceContent(text=text, modified_at=modified)

        return None

    def _probe_descriptor(self, location: SourceLocation, name: str) -> ProbeResult:
        if location.is_archive:
            try:
                with archive.open_archive(location.path) as zf:
                    info = archive.find_entry(zf, name)
            except ArchiveReadError as e:
                return ProbeResult.failed(location, e)
            if info is None:
                return ProbeResult.not_found(location)
            return ProbeResult.found(
                location,
                ArchiveResource(
                    archive_path=os.path.abspath(location.path),
                    entry_name=name,
                    entry_timestamp=archive.entry_timestamp(info),
                ),
            )

        candidate = os.path.join(location.path, name)
        if not os.path.exists(candidate):
            return ProbeResult.not_found(location)
        return ProbeResult.found(location, FileResource(os.path.normpath(candidate)))

    def _probe_archive_content(self, location: SourceLocation, name: str) -> ProbeResult:
        try:
            hit = archive.read_entry_text(location.path, name)
        except ArchiveReadError as e:
            return ProbeResult.failed(location, e)
        if hit is None:
            return ProbeResult.not_found(location)
        text, timestamp = hit
        return ProbeResult.found(location, SourceContent(text=text, modified_at=timestamp))

    def _note_skip(self, probe: ProbeResult, name: str) -> None:
        if probe.status is not ProbeStatus.FAILED:
            return
        logger.debug(f"[resolve] skipping {probe.location.path} for {name}: {probe.error}")
        emit(self._audit_sink, "skip", name, probe.location.path, error=str(probe.error))
