"""
Data models for the tree walker module.
"""

import os
from dataclasses import dataclass
from typing import Optional, Union

from treefind.core.entry_kind import EntryKind
from treefind.core.errors import EntryResolutionError, MetadataFetchError


@dataclass(frozen=True)
class WalkEntry:
    """
    A resolved entry visited during a walk.

    Attributes:
        path: Entry path as traversed (root joined with the names below it)
        name: Base name of the entry
        depth: Distance from the search root (0 for the root itself)
        follow_links: Classify through a symlink instead of as the link
            itself. Only set for a root the walker descends through.
    """

    path: str
    name: str
    depth: int
    follow_links: bool = False

    def kind(self) -> Optional[EntryKind]:
        """
        Read the entry's metadata and classify it.

        Unless follow_links is set, symlinks are not followed and a link
        reports as SYMLINK regardless of its target.

        Returns:
            EntryKind, or None for fifos, sockets and device nodes

        Raises:
            MetadataFetchError: If the metadata cannot be read
        """
        try:
            if self.follow_links:
                st = os.stat(self.path)
            else:
                st = os.lstat(self.path)
        except OSError as e:
            raise MetadataFetchError(self.path, e) from e
        return EntryKind.from_mode(st.st_mode)


WalkItem = Union[WalkEntry, EntryResolutionError]
