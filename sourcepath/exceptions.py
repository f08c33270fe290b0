"""Exception classes for sourcepath."""


class SourcePathError(Exception):
    """Base exception for all sourcepath errors."""
    pass


class ResourceReadError(SourcePathError, OSError):
    """Raised when a resolved resource cannot be read."""
    pass


class ArchiveReadError(ResourceReadError):
    """Raised when an archive or one of its entries cannot be read."""
    pass


class EmbeddedResourceError(SourcePathError):
    """Raised when an embedded resource payload cannot be decompressed."""
    pass


class ConfigError(SourcePathError):
    """Raised when configuration is invalid."""
    pass
