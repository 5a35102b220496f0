"""
TreeWalker implementation for depth-first directory traversal.
"""

import logging
import os
import stat
from typing import Iterator

from treefind.core.errors import EntryResolutionError

from .interfaces import TreeWalkerInterface
from .models import WalkEntry, WalkItem

logger = logging.getLogger(__name__)


def _base_name(path: str) -> str:
    """Return the last component of a root path, or the path itself."""
    name = os.path.basename(os.path.normpath(path))
    return name or path


class TreeWalker(TreeWalkerInterface):
    """
    Concrete implementation of TreeWalkerInterface.

    Walks a root depth-first in pre-order:
    - The root is yielded first, then each child followed by its subtree
    - Symlinks below the root are never followed, so cycles cannot occur
    - Unreadable directories yield an EntryResolutionError and are skipped
    """

    def __init__(self, sort_entries: bool = True, follow_root_links: bool = True):
        """
        Initialize the TreeWalker.

        Args:
            sort_entries: Visit children of each directory in name order.
                         When False, the order of the directory listing is used.
            follow_root_links: Descend into a root that is a symlink to a
                              directory. Links below the root are never followed.
        """
        self._sort_entries = sort_entries
        self._follow_root_links = follow_root_links

    def walk(self, root: str) -> Iterator[WalkItem]:
        """
        Walk a root and yield its entries in pre-order.

        Args:
            root: Root path, as supplied by the user

        Yields:
            WalkEntry or EntryResolutionError items
        """
        try:
            if self._follow_root_links:
                st = os.stat(root)
            else:
                st = os.lstat(root)
        except OSError as e:
            logger.debug(f"Cannot resolve root {root}: {e}")
            yield EntryResolutionError(root, e)
            return

        yield WalkEntry(
            path=root,
            name=_base_name(root),
            depth=0,
            follow_links=self._follow_root_links,
        )

        if stat.S_ISDIR(st.st_mode):
            yield from self._walk_directory(root, depth=1)

    def _walk_directory(self, dir_path: str, depth: int) -> Iterator[WalkItem]:
        """
        Yield the subtree below a directory.

        The listing is read completely before recursing so the directory
        handle is closed before descending.

        Args:
            dir_path: Directory whose children are visited
            depth: Depth of the children
        """
        try:
            with os.scandir(dir_path) as it:
                children = list(it)
        except OSError as e:
            logger.debug(f"Cannot list directory {dir_path}: {e}")
            yield EntryResolutionError(dir_path, e)
            return

        if self._sort_entries:
            children.sort(key=lambda child: child.name)

        for child in children:
            yield WalkEntry(path=child.path, name=child.name, depth=depth)

            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError as e:
                yield EntryResolutionError(child.path, e)
                continue

            if is_dir:
                yield from self._walk_directory(child.path, depth + 1)
