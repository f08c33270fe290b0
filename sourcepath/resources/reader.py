"""Reading resource content from resolved descriptors."""

import os
from pathlib import Path
from typing import Optional

from sourcepath.exceptions import ArchiveReadError, ResourceReadError
from sourcepath.models import (
    ArchiveResource,
    BundledResource,
    FileResource,
    ResourceDescriptor,
    SourceContent,
)
from sourcepath.observability.audit import AuditSink, emit
from sourcepath.resources import archive
from sourcepath.resources.embedded import EmbeddedResourceTable


class ContentReader:
    """Reads the text and modification time of a resolved resource.

    Each descriptor kind has its own source of truth for the timestamp:
    - BundledResource: the embedded table's build timestamp
    - FileResource: the file's mtime
    - ArchiveResource: the entry's stored timestamp (not the archive's mtime)

    Once a resource has been resolved, failing to read it is an error: a file
    that vanished between resolve() and read() raises ResourceReadError and is
    not retried.
    """

    def __init__(
        self,
        embedded: EmbeddedResourceTable,
        audit_sink: AuditSink | None = None,
    ):
        """Initialize with the embedded table used for bundled descriptors.

        Args:
            embedded: EmbeddedResourceTable serving BundledResource descriptors
            audit_sink: Optional AuditSink recording reads
        """
        self.embedded = embedded
        self._audit_sink = audit_sink

    def read(self, descriptor: ResourceDescriptor) -> Optional[SourceContent]:
        """Read the content a descriptor points at.

        Args:
            descriptor: Descriptor returned by ResourceLocator.resolve()

        Returns:
            SourceContent, or None for a bundled resource missing from the table

        Raises:
            ResourceReadError: If a file or archive entry cannot be read
            EmbeddedResourceError: If an embedded payload is corrupt
            TypeError: If descriptor is not a known descriptor type
        """
        if isinstance(descriptor, BundledResource):
            text = self.embedded.load(descriptor.name)
            if text is None:
                return None
            content = SourceContent(text=text, modified_at=self.embedded.built_at)
            location = None
        elif isinstance(descriptor, FileResource):
            content = self._read_path(descriptor.path)
            location = descriptor.path
        elif isinstance(descriptor, ArchiveResource):
            content = self._read_archive(descriptor)
            location = descriptor.archive_path
        else:
            raise TypeError(f"Unknown resource descriptor: {descriptor!r}")

        emit(self._audit_sink, "read", self._name_of(descriptor), location,
             bytes=len(content.text.encode("utf-8")))
        return content

    def read_file(self, path: str | Path) -> Optional[SourceContent]:
        """Read a single path directly, outside any source location.

        Args:
            path: Absolute or relative file path

        Returns:
            SourceContent, or None if the file cannot be read
        """
        try:
            return self._read_path(path)
        except ResourceReadError:
            return None

    def read_archive_entry(self, archive_path: str | Path, entry_name: str) -> str:
        """Return the text of one archive entry.

        Raises:
            ArchiveReadError: If the archive is unreadable or has no such entry
        """
        hit = archive.read_entry_text(archive_path, entry_name)
        if hit is None:
            raise ArchiveReadError(f"No entry {entry_name} in {archive_path}")
        return hit[0]

    def _read_path(self, path: str | Path) -> SourceContent:
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                text = f.read()
            modified = os.stat(path).st_mtime
        except (OSError, ValueError, UnicodeDecodeError) as e:
            raise ResourceReadError(f"Cannot read {path}: {e}") from e
        return SourceContent(text=text, modified_at=modified)

    def _read_archive(self, descriptor: ArchiveResource) -> SourceContent:
        hit = archive.read_entry_text(descriptor.archive_path, descriptor.entry_name)
        if hit is None:
            raise ArchiveReadError(
                f"Entry {descriptor.entry_name} disappeared from {descriptor.archive_path}"
            )
        text, timestamp = hit
        return SourceContent(text=text, modified_at=timestamp)

    @staticmethod
    def _name_of(descriptor: ResourceDescriptor) -> str:
        if isinstance(descriptor, BundledResource):
            return descriptor.name
        if isinstance(descriptor, FileResource):
            return descriptor.path
        return descriptor.entry_name
