"""Ordered registry of source locations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from sourcepath.discovery.paths import expand_path
from sourcepath.models import SourceKind, SourceLocation


class SourceRegistry:
    """Ordered, deduplicated collection of source locations.

    Each location is either a directory or an archive file; the kind is
    derived from the path suffix. Paths are stored in their expanded,
    absolute, normalized form, so two spellings of the same path are
    registered only once. Iteration order is first-insertion order among
    the entries currently present.

    Example:
        >>> registry = SourceRegistry(seed_cwd=False)
        >>> registry.add(["~/lib/core.jar", "./src"])
        >>> registry.list()
        ['/home/me/lib/core.jar', '/home/me/project/src']
    """

    def __init__(
        self,
        paths: Iterable[str | Path] | None = None,
        archive_suffixes: Iterable[str] = (".jar",),
        seed_cwd: bool = True,
    ):
        """Initialize the registry.

        Args:
            paths: Optional initial source paths
            archive_suffixes: Path suffixes that mark a location as an archive
            seed_cwd: Whether to register the current working directory first
        """
        self._archive_suffixes = tuple(archive_suffixes)
        # dict keys give us an insertion-ordered set
        self._paths: dict[str, None] = {}

        if seed_cwd:
            self.add([os.getcwd()])
        if paths:
            self.add(paths)

    def add(self, paths: Iterable[str | Path]) -> None:
        """Register source paths, silently absorbing duplicates.

        Args:
            paths: Paths to add; "~" and "$VAR" forms are expanded
        """
        for path in paths:
            normalized = expand_path(path)
            if normalized not in self._paths:
                self._paths[normalized] = None

    def remove(self, path: str | Path) -> bool:
        """Unregister a source path.

        Args:
            path: Path to remove, normalized the same way as in add()

        Returns:
            True if the path was registered and has been removed
        """
        normalized = expand_path(path)
        if normalized in self._paths:
            del self._paths[normalized]
            return True
        return False

    def list(self) -> list[str]:
        """Return a snapshot of registered paths in iteration order."""
        return list(self._paths)

    def locations(self) -> list[SourceLocation]:
        """Return a snapshot of registered locations with their kinds."""
        return [SourceLocation(path, self.kind_of(path)) for path in self._paths]

    def kind_of(self, path: str) -> SourceKind:
        if path.endswith(self._archive_suffixes):
            return SourceKind.ARCHIVE
        return SourceKind.DIRECTORY

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return expand_path(path) in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"SourceRegistry({self.list()!r})"
