"""
CLI for treefind.

Recursively searches directories and prints paths matching entry type and
name filters.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import yaml
from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from treefind import __version__
from treefind.cli.ui import render_error, render_warning
from treefind.core.config import load_config, setup_logging
from treefind.core.errors import ConfigError, MetadataFetchError
from treefind.core.search_config import build_search_config
from treefind.core.walker import TreeWalker
from treefind.services import SearchService

logger = logging.getLogger(__name__)

# Rich console for messages; matches go straight to stdout
err_console = Console(stderr=True)

app = typer.Typer(
    name="treefind",
    help="Recursively find directories, files and symlinks by type and name.",
    add_completion=False,
)


class EntryTypeChoice(str, Enum):
    """Accepted values for -t/--type."""

    FILE = "f"
    DIRECTORY = "d"
    SYMLINK = "l"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"treefind {__version__}")
        raise typer.Exit()


@app.command()
def main(
    roots: Optional[list[str]] = typer.Argument(
        None, metavar="[DIR]...", help="Search directory (default: .)", show_default=False
    ),
    names: Optional[list[str]] = typer.Option(
        None,
        "--name",
        "-n",
        metavar="PATTERN",
        help="Regular expression matched against entry names. Can be specified multiple times.",
    ),
    types: Optional[list[EntryTypeChoice]] = typer.Option(
        None,
        "--type",
        "-t",
        help="Entry type: f (file), d (directory), l (symlink). Can be specified multiple times.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="TREEFIND_CONFIG",
        help="Settings file (.yaml, .yml or .json)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Search directories for entries matching type and name filters."""
    # .env is looked up from the working directory, not the install location
    load_dotenv(find_dotenv(usecwd=True))

    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        render_error(f"Could not load settings: {e}", err_console)
        raise typer.Exit(1)

    setup_logging(cfg.logging, verbose=verbose)
    logger.debug(f"Settings: {cfg.to_dict()}")

    try:
        search_config = build_search_config(
            roots=roots,
            names=names,
            types=[t.value for t in types] if types else None,
        )
    except ConfigError as e:
        render_error(str(e), err_console)
        raise typer.Exit(1)

    walker = TreeWalker(
        sort_entries=cfg.traversal.sort_entries,
        follow_root_links=cfg.traversal.follow_root_links,
    )

    try:
        summary = SearchService(walker=walker).run(search_config)
    except MetadataFetchError as e:
        render_error(str(e), err_console)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        render_warning("Interrupted", err_console)
        raise typer.Exit(130)

    logger.debug(f"Summary: {summary}")


if __name__ == "__main__":
    app()
