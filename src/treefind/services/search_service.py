"""
Search service for treefind.

Drives the tree walker over every search root, filters entries by kind and
name, and streams matching paths and per-entry diagnostics.
"""

import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from treefind.core.entry_kind import EntryKind
from treefind.core.errors import EntryResolutionError
from treefind.core.search_config import SearchConfig
from treefind.core.walker import TreeWalker, TreeWalkerInterface

logger = logging.getLogger(__name__)


@dataclass
class SearchSummary:
    """
    Counters collected during a search run.

    Attributes:
        roots_searched: Number of roots walked
        entries_visited: Resolved entries evaluated against the filters
        matches: Paths written to the output stream
        errors: Diagnostics written to the error stream
    """

    roots_searched: int = 0
    entries_visited: int = 0
    matches: int = 0
    errors: int = 0


def resolve_visible_kinds(
    type_filters: Optional[frozenset[EntryKind]],
) -> frozenset[EntryKind]:
    """Return the kinds to report: every kind when no type filter is set."""
    if type_filters is None:
        return frozenset(EntryKind)
    return frozenset(type_filters)


def name_matches(name: str, name_filters: Optional[tuple[re.Pattern, ...]]) -> bool:
    """
    Check a base name against the name filters.

    A name matches when no filters are set, or when any pattern is found
    anywhere in the name.
    """
    if name_filters is None:
        return True
    return any(pattern.search(name) for pattern in name_filters)


def _write_line(stream: TextIO, text: str) -> None:
    """
    Write one line, keeping undecodable filename bytes intact.

    Names that are not valid in the filesystem encoding arrive from
    os.scandir as surrogate escapes. Streams with a binary buffer receive
    the original bytes; other streams get the text with surrogates
    replaced by backslash escapes.
    """
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        stream.flush()
        buffer.write(os.fsencode(text) + b"\n")
        buffer.flush()
        return

    line = text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
    stream.write(f"{line}\n")
    stream.flush()


class SearchService:
    """
    Runs a search described by a SearchConfig.

    Entry resolution errors are reported on the error stream and the walk
    continues. A MetadataFetchError raised while classifying an entry
    aborts the run and propagates to the caller.
    """

    def __init__(
        self,
        walker: Optional[TreeWalkerInterface] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        """
        Initialize the SearchService.

        Args:
            walker: Walker used for every root. Defaults to a TreeWalker.
            out: Stream for matching paths. Defaults to sys.stdout at write time.
            err: Stream for diagnostics. Defaults to sys.stderr at write time.
        """
        self._walker = walker or TreeWalker()
        self._out = out
        self._err = err

    def _write_match(self, path: str) -> None:
        _write_line(self._out or sys.stdout, path)

    def _write_error(self, root: str, error: EntryResolutionError) -> None:
        _write_line(self._err or sys.stderr, f"{root}: {error}")

    def run(self, config: SearchConfig) -> SearchSummary:
        """
        Search every root in order and write matching paths.

        Args:
            config: Validated search configuration

        Returns:
            SearchSummary with counters for the run

        Raises:
            MetadataFetchError: If an entry's metadata cannot be read
        """
        visible = resolve_visible_kinds(config.type_filters)
        summary = SearchSummary()

        for root in config.roots:
            logger.debug(f"Searching root: {root}")
            summary.roots_searched += 1

            for item in self._walker.walk(root):
                if isinstance(item, EntryResolutionError):
                    logger.debug(f"Skipping unreadable entry: {item.path} - {item}")
                    self._write_error(root, item)
                    summary.errors += 1
                    continue

                summary.entries_visited += 1
                kind = item.kind()

                if kind not in visible:
                    continue
                if not name_matches(item.name, config.name_filters):
                    continue

                self._write_match(item.path)
                summary.matches += 1

        logger.debug(
            f"Search complete: {summary.matches} matches, "
            f"{summary.entries_visited} entries, {summary.errors} errors"
        )
        return summary


def run_search(
    config: SearchConfig,
    walker: Optional[TreeWalkerInterface] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> SearchSummary:
    """
    Run a search with a fresh SearchService.

    Convenience wrapper for callers that do not need to reuse the service.
    """
    return SearchService(walker=walker, out=out, err=err).run(config)
