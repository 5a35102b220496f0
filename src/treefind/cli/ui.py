"""
UI helpers for the treefind CLI.

Error and status messages are rendered with Rich on stderr so that stdout
carries nothing but matching paths.
"""

from rich.console import Console
from rich.markup import escape


def render_error(message: str, console: Console) -> None:
    """
    Render an error message.

    Args:
        message: Error message to display. Markup characters are escaped.
        console: Rich Console instance for output.
    """
    console.print(
        f"[bold red]Error:[/bold red] {escape(message)}",
        highlight=False,
        soft_wrap=True,
    )


def render_warning(message: str, console: Console) -> None:
    """
    Render a warning message in yellow.

    Args:
        message: Warning message to display.
        console: Rich Console instance for output.
    """
    console.print(
        f"[yellow]Warning:[/yellow] {escape(message)}",
        highlight=False,
        soft_wrap=True,
    )
