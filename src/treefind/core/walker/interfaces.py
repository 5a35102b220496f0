"""
Abstract interfaces for directory walking.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from .models import WalkItem


class TreeWalkerInterface(ABC):
    """
    Abstract interface for directory traversal.

    Implementations walk a single root depth-first and yield every visited
    position, either as a WalkEntry or as an EntryResolutionError.
    """

    @abstractmethod
    def walk(self, root: str) -> Iterator[WalkItem]:
        """
        Walk a root and yield its entries in pre-order.

        Args:
            root: Root path, as supplied by the user

        Yields:
            WalkEntry for each resolved entry (the root first), or
            EntryResolutionError for each entry that could not be resolved

        Notes:
            - Never raises for unreadable directories or a missing root
            - Entry paths are never canonicalized
        """
        pass
