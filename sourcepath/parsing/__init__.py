"""Parsing module for resolver configuration."""

from sourcepath.parsing.config import ConfigLoader

__all__ = ["ConfigLoader"]
