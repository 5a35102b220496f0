"""
Tree walker module for treefind.

Provides depth-first directory traversal that reports unreadable entries
as values instead of aborting the walk.
"""

from .interfaces import TreeWalkerInterface
from .models import WalkEntry, WalkItem
from .walker import TreeWalker

__all__ = [
    # Main classes
    "TreeWalker",
    "TreeWalkerInterface",
    # Models
    "WalkEntry",
    "WalkItem",
]
