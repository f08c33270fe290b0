"""Runtime module for resolver sessions."""

from sourcepath.runtime.session import ResourceSession

__all__ = ["ResourceSession"]
