"""Persistence of compiled artifacts as opaque text blobs."""

from pathlib import Path
from typing import Optional

from ..models import SourceContent


class ArtifactCache:
    """Reads and writes cached compiler output keyed by file path.

    The cache has no resolution semantics: a key is a path, a value is the
    text stored there. Relative keys are resolved against ``cache_dir`` when
    one is configured, otherwise against the current working directory.

    Reads return None on any failure. Writes are best-effort and hand the
    error back to the caller instead of raising it.
    """

    def __init__(self, cache_dir: Path | None = None):
        """Initialize cache.

        Args:
            cache_dir: Optional base directory for relative cache keys
        """
        self.cache_dir = Path(cache_dir).expanduser() if cache_dir else None

    def _get_cache_path(self, path: str | Path) -> Path:
        """Map a cache key to the file that stores it."""
        path = Path(path).expanduser()
        if self.cache_dir is not None and not path.is_absolute():
            return self.cache_dir / path
        return path

    def read(self, path: str | Path) -> Optional[SourceContent]:
        """Read a cached artifact.

        Args:
            path: Cache key (file path)

        Returns:
            SourceContent with the stored text and file mtime, or None
        """
        cache_path = self._get_cache_path(path)
        try:
            with open(cache_path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
            modified = cache_path.stat().st_mtime
        except (OSError, UnicodeDecodeError):
            return None
        return SourceContent(text=text, modified_at=modified)

    def write(self, path: str | Path, text: str) -> Optional[OSError]:
        """Store an artifact.

        Args:
            path: Cache key (file path)
            text: Text to store

        Returns:
            None on success, the OSError on failure
        """
        cache_path = self._get_cache_path(path)
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the text byte-for-byte on every platform
            with open(cache_path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            return e
        return None

    def invalidate(self, path: str | Path) -> None:
        """Remove a cached artifact if present."""
        cache_path = self._get_cache_path(path)
        try:
            if cache_path.exists():
                cache_path.unlink()
        except OSError:
            # best-effort, like writes
            pass


_default_cache = ArtifactCache()


def read_cache(path: str | Path) -> Optional[SourceContent]:
    """Read a cached artifact relative to the working directory."""
    return _default_cache.read(path)


def write_cache(path: str | Path, text: str) -> Optional[OSError]:
    """Write a cached artifact relative to the working directory."""
    return _default_cache.write(path, text)
