"""Embedded resource table access.

In PACKAGED mode the host ships a read-only table mapping resource names to
compressed payloads. In DEVELOPMENT mode the same names are served from a
local build-output directory, so resolver code behaves identically before and
after packaging.
"""

import zlib
from pathlib import Path
from typing import Mapping, Optional

from sourcepath.discovery.paths import ensure_dir, native_name
from sourcepath.exceptions import EmbeddedResourceError
from sourcepath.models import Mode

# Accept both zlib and gzip framing
_AUTO_WBITS = 32 + zlib.MAX_WBITS


class EmbeddedResourceTable:
    """Read-only table of resources compiled into the host program.

    The table is populated once at construction and never mutated afterwards.
    """

    def __init__(
        self,
        mode: Mode = Mode.DEVELOPMENT,
        resources: Mapping[str, bytes] | None = None,
        dev_dir: str | Path = "target",
        built_at: float = 0.0,
    ):
        """Initialize the table.

        Args:
            mode: PACKAGED serves ``resources``; DEVELOPMENT serves ``dev_dir``
            resources: Mapping of native-separator names to compressed bytes
            dev_dir: Local build-output directory used in DEVELOPMENT mode
            built_at: Timestamp reported as modification time of embedded resources
        """
        self.mode = mode
        self.dev_dir = Path(dev_dir)
        self.built_at = built_at
        self._resources: dict[str, bytes] = dict(resources or {})

    @classmethod
    def from_directory(
        cls,
        root: str | Path,
        mode: Mode = Mode.PACKAGED,
        dev_dir: str | Path = "target",
        built_at: float = 0.0,
    ) -> "EmbeddedResourceTable":
        """Load a pre-built table whose compressed blobs are files under root.

        Each file's path relative to root becomes its resource name.

        Args:
            root: Directory holding one compressed blob per resource
            mode: Mode of the returned table
            dev_dir: Build-output directory for DEVELOPMENT mode
            built_at: Timestamp reported for embedded resources
        """
        root = Path(root)
        resources = {}
        if root.is_dir():
            for blob in sorted(root.rglob("*")):
                if blob.is_file():
                    resources[str(blob.relative_to(root))] = blob.read_bytes()
        return cls(mode=mode, resources=resources, dev_dir=dev_dir, built_at=built_at)

    @property
    def packaged(self) -> bool:
        return self.mode is Mode.PACKAGED

    def is_bundled(self, name: str) -> bool:
        """Check whether name is served by this table."""
        if not self.packaged:
            return (self.dev_dir / name).is_file()
        return native_name(name) in self._resources

    def load(self, name: str) -> Optional[str]:
        """Return the text of an embedded resource.

        Returns:
            The decompressed text, or None if the resource is absent (or, in
            DEVELOPMENT mode, cannot be read)

        Raises:
            EmbeddedResourceError: If a PACKAGED payload cannot be decompressed
        """
        if not self.packaged:
            try:
                return (self.dev_dir / name).read_bytes().decode("utf-8")
            except (OSError, ValueError, UnicodeDecodeError):
                return None

        compressed = self._resources.get(native_name(name))
        if compressed is None:
            return None
        try:
            return zlib.decompress(compressed, _AUTO_WBITS).decode("utf-8")
        except (zlib.error, UnicodeDecodeError) as e:
            raise EmbeddedResourceError(f"Corrupt embedded resource {name}: {e}") from e

    def keys(self) -> list[str]:
        """List all embedded resource names (empty in DEVELOPMENT mode)."""
        if not self.packaged:
            return []
        return list(self._resources)

    def export_to(self, outdir: str | Path) -> list[Path]:
        """Write every embedded resource as a text file under outdir.

        Does nothing in DEVELOPMENT mode, where the resources already live on
        disk.

        Returns:
            Paths of the files written
        """
        written = []
        if not self.packaged:
            return written

        outdir = Path(outdir)
        for name in self.keys():
            target = outdir / name
            ensure_dir(target.parent)
            target.write_text(self.load(name) or "", encoding="utf-8")
            written.append(target)
        return written

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_bundled(name)

    def __repr__(self) -> str:
        return f"EmbeddedResourceTable(mode={self.mode.value}, resources={len(self._resources)})"
