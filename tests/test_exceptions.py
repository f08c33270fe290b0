"""Tests for the exception hierarchy."""

import pytest

from sourcepath.exceptions import (
    ArchiveReadError,
    ConfigError,
    EmbeddedResourceError,
    ResourceReadError,
    SourcePathError,
)


@pytest.mark.parametrize("exc_class", [
    ResourceReadError,
    ArchiveReadError,
    EmbeddedResourceError,
    ConfigError,
])
def test_all_derive_from_base(exc_class):
    assert issubclass(exc_class, SourcePathError)


def test_read_errors_are_os_errors():
    """Read failures can be handled as ordinary I/O errors."""
    with pytest.raises(OSError):
        raise ArchiveReadError("Cannot open archive /lib/a.jar")


def test_message_is_preserved():
    error = ResourceReadError("Cannot read /src/a.cljs")

    assert str(error) == "Cannot read /src/a.cljs"
