"""sourcepath - Resolve resource names against directories, archives and embedded tables.

This library backs a language runtime's module loading: given a relative
resource name it finds the first source providing it (embedded resources,
then registered directories and .jar archives in order), reads its content,
and collects manifest files contributed by every source.
"""

from sourcepath.exceptions import (
    SourcePathError,
    ResourceReadError,
    ArchiveReadError,
    EmbeddedResourceError,
    ConfigError,
)

from sourcepath.models import (
    Mode,
    SourceKind,
    SourceLocation,
    BundledResource,
    FileResource,
    ArchiveResource,
    ResourceDescriptor,
    SourceContent,
    ManifestMatch,
    ProbeStatus,
    ProbeResult,
    AuditEvent,
    ResolverConfig,
)

from sourcepath.discovery import SourceRegistry, ArtifactCache, read_cache, write_cache
from sourcepath.resources import (
    EmbeddedResourceTable,
    ResourceLocator,
    ContentReader,
    ManifestAggregator,
)
from sourcepath.observability import AuditSink, JSONLAuditSink, StdoutAuditSink
from sourcepath.parsing import ConfigLoader
from sourcepath.adapters import CompletionBridge, python_completions
from sourcepath.runtime import ResourceSession

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "SourcePathError",
    "ResourceReadError",
    "ArchiveReadError",
    "EmbeddedResourceError",
    "ConfigError",
    # Models
    "Mode",
    "SourceKind",
    "SourceLocation",
    "BundledResource",
    "FileResource",
    "ArchiveResource",
    "ResourceDescriptor",
    "SourceContent",
    "ManifestMatch",
    "ProbeStatus",
    "ProbeResult",
    "AuditEvent",
    "ResolverConfig",
    # Components
    "SourceRegistry",
    "ArtifactCache",
    "read_cache",
    "write_cache",
    "EmbeddedResourceTable",
    "ResourceLocator",
    "ContentReader",
    "ManifestAggregator",
    "ConfigLoader",
    "CompletionBridge",
    "python_completions",
    # Runtime
    "ResourceSession",
    # Observability
    "AuditSink",
    "JSONLAuditSink",
    "StdoutAuditSink",
]
