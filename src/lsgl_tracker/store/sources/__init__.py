"""Pluggable flight data sources."""

from lsgl_tracker.store.sources.base import Dataset, RowSource, SourceError
from lsgl_tracker.store.sources.github import GitHubCsvSource

__all__ = ["Dataset", "GitHubCsvSource", "RowSource", "SourceError"]
