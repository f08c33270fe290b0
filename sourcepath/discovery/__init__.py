"""Discovery module for source locations and artifact caching."""

from sourcepath.discovery.registry import SourceRegistry
from sourcepath.discovery.cache import ArtifactCache, read_cache, write_cache
from sourcepath.discovery.paths import expand_path, native_name

__all__ = [
    "SourceRegistry",
    "ArtifactCache",
    "read_cache",
    "write_cache",
    "expand_path",
    "native_name",
]
