"""
Services layer for treefind.
"""

from .search_service import (
    SearchService,
    SearchSummary,
    name_matches,
    resolve_visible_kinds,
    run_search,
)

__all__ = [
    "SearchService",
    "SearchSummary",
    "name_matches",
    "resolve_visible_kinds",
    "run_search",
]
