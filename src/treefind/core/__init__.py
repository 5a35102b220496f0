"""
Core building blocks for treefind: errors, search configuration,
application settings and the directory walker.
"""

from .errors import (
    ConfigError,
    EntryResolutionError,
    MetadataFetchError,
    TreefindError,
)
from .entry_kind import EntryKind
from .search_config import SearchConfig, build_search_config

__all__ = [
    "ConfigError",
    "EntryKind",
    "EntryResolutionError",
    "MetadataFetchError",
    "SearchConfig",
    "TreefindError",
    "build_search_config",
]
