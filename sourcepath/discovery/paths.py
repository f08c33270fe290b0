"""Path string normalization helpers."""

import os
from pathlib import Path


def expand_path(path: str | Path) -> str:
    """Expand ``~`` and environment variables, then make absolute and normalized.

    Args:
        path: Path string as given by the user (e.g. "~/lib/foo.jar", "$HOME/src")

    Returns:
        Absolute, normalized path string
    """
    expanded = os.path.expanduser(os.path.expandvars(str(path)))
    return os.path.normpath(os.path.abspath(expanded))


def native_name(name: str) -> str:
    """Convert a '/'-separated resource name to the host's native separator."""
    if os.sep != "/":
        return name.replace("/", os.sep)
    return name


def ensure_dir(path: Path) -> None:
    """Create a directory and its parents if missing."""
    Path(path).mkdir(parents=True, exist_ok=True)
