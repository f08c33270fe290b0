"""Resources module for locating and reading resource content."""

from sourcepath.resources.embedded import EmbeddedResourceTable
from sourcepath.resources.locator import ResourceLocator
from sourcepath.resources.reader import ContentReader
from sourcepath.resources.aggregator import ManifestAggregator

__all__ = [
    "EmbeddedResourceTable",
    "ResourceLocator",
    "ContentReader",
    "ManifestAggregator",
]
