"""
Entry kind classification for filesystem objects.
"""

import stat
from enum import Enum
from typing import Optional


class EntryKind(Enum):
    """Kinds of filesystem entries treefind can report."""

    DIRECTORY = "d"
    FILE = "f"
    SYMLINK = "l"

    @classmethod
    def from_token(cls, token: str) -> Optional["EntryKind"]:
        """
        Map a ``-t/--type`` token to its kind.

        Args:
            token: One of ``"d"``, ``"f"`` or ``"l"``.

        Returns:
            The matching EntryKind, or None for an unrecognized token.
        """
        try:
            return cls(token)
        except ValueError:
            return None

    @classmethod
    def from_mode(cls, mode: int) -> Optional["EntryKind"]:
        """
        Classify a ``st_mode`` value.

        Fifos, sockets and device nodes have no kind and return None.
        """
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.FILE
        return None
