"""Read-only access to zip-compatible archive locations."""

import lzma
import zipfile
import zlib
from datetime import datetime
from pathlib import Path

from sourcepath.exceptions import ArchiveReadError

# Raised by zipfile and its decompressors on damaged or unsupported entry data
_ENTRY_ERRORS = (
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
    UnicodeDecodeError,
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
)


def entry_timestamp(info: zipfile.ZipInfo) -> float:
    """Return an entry's stored timestamp as POSIX seconds.

    Zip entries carry a naive local date/time, so it is interpreted in the
    local timezone.
    """
    return datetime(*info.date_time).timestamp()


def open_archive(archive_path: str | Path) -> zipfile.ZipFile:
    """Open an archive for reading.

    Raises:
        ArchiveReadError: If the file is missing, unreadable or not a zip archive
    """
    try:
        return zipfile.ZipFile(archive_path, "r")
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveReadError(f"Cannot open archive {archive_path}: {e}") from e


def find_entry(archive: zipfile.ZipFile, name: str) -> zipfile.ZipInfo | None:
    """Look up the entry whose path inside the archive equals name exactly."""
    try:
        return archive.getinfo(name)
    except KeyError:
        return None


def read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> str:
    """Extract an entry as UTF-8 text.

    Raises:
        ArchiveReadError: If the entry data is corrupt or not valid UTF-8
    """
    try:
        return archive.read(info).decode("utf-8")
    except _ENTRY_ERRORS as e:
        raise ArchiveReadError(
            f"Cannot read entry {info.filename} from {archive.filename}: {e}"
        ) from e


def read_entry_text(archive_path: str | Path, name: str) -> tuple[str, float] | None:
    """Open an archive and read one entry.

    Args:
        archive_path: Path to the archive file
        name: Exact entry name

    Returns:
        Tuple of (text, entry timestamp), or None if there is no such entry

    Raises:
        ArchiveReadError: If the archive or the entry cannot be read
    """
    with open_archive(archive_path) as archive:
        info = find_entry(archive, name)
        if info is None:
            return None
        return read_entry(archive, info), entry_timestamp(info)


def list_entries(archive_path: str | Path, prefix: str) -> list[str]:
    """List file entries whose name starts with prefix, in archive order.

    Directory entries are not included.

    Raises:
        ArchiveReadError: If the archive cannot be read
    """
    with open_archive(archive_path) as archive:
        return [
            info.filename
            for info in archive.infolist()
            if not info.is_dir() and info.filename.startswith(prefix)
        ]
