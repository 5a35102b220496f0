"""
Search configuration for treefind.

Turns raw command-line values (roots, name patterns, type tokens) into an
immutable SearchConfig that drives a single traversal run.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .entry_kind import EntryKind
from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "."


@dataclass(frozen=True)
class SearchConfig:
    """
    Validated search configuration.

    Attributes:
        roots: Search roots in the order they are walked. Never empty.
        name_filters: Compiled name patterns, or None to match any name.
            When present it holds at least one pattern.
        type_filters: Entry kinds to report, or None to report every kind.
    """

    roots: tuple[str, ...] = (DEFAULT_ROOT,)
    name_filters: Optional[tuple[re.Pattern, ...]] = None
    type_filters: Optional[frozenset[EntryKind]] = None

    def __post_init__(self) -> None:
        if not self.roots:
            raise ValueError("SearchConfig requires at least one root")
        if self.name_filters is not None and not self.name_filters:
            raise ValueError("name_filters must be None or non-empty")


def _compile_names(names: Iterable[str]) -> Optional[tuple[re.Pattern, ...]]:
    """Compile name patterns, failing on the first invalid one."""
    compiled: list[re.Pattern] = []
    for name in names:
        try:
            compiled.append(re.compile(name))
        except re.error as e:
            raise ConfigError(name) from e
    return tuple(compiled) if compiled else None


def _resolve_types(
    types: Iterable[Union[str, EntryKind]],
) -> frozenset[EntryKind]:
    kinds: set[EntryKind] = set()
    for token in types:
        if isinstance(token, EntryKind):
            kinds.add(token)
            continue
        kind = EntryKind.from_token(token)
        if kind is None:
            logger.debug(f"Ignoring unrecognized entry type: {token!r}")
            continue
        kinds.add(kind)
    return frozenset(kinds)


def build_search_config(
    roots: Optional[Iterable[str]] = None,
    names: Optional[Iterable[str]] = None,
    types: Optional[Iterable[Union[str, EntryKind]]] = None,
) -> SearchConfig:
    """
    Build a SearchConfig from raw user input.

    Args:
        roots: Search roots. Defaults to the current directory when None or empty.
        names: Regular expressions matched against entry base names.
        types: Type tokens (``"f"``, ``"d"``, ``"l"``) or EntryKind values.
            Unrecognized tokens are dropped.

    Returns:
        SearchConfig ready to drive a search

    Raises:
        ConfigError: If any name pattern fails to compile. Patterns after the
            failing one are not compiled.
    """
    root_list = tuple(roots) if roots is not None else ()
    if not root_list:
        root_list = (DEFAULT_ROOT,)

    name_filters = _compile_names(names) if names is not None else None

    type_list = list(types) if types is not None else []
    type_filters = _resolve_types(type_list) if type_list else None

    return SearchConfig(
        roots=root_list,
        name_filters=name_filters,
        type_filters=type_filters,
    )
