"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from wpslim.core.theme import get_theme

_KB = 1024
_MB = 1024 * 1024
_GB = 1024 * 1024 * 1024


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def configure_logging(verbose: bool = False) -> None:
    """Route log records to the stderr console.

    Args:
        verbose: If True, log at DEBUG level, otherwise WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def create_summary_table(title: str) -> Table:
    """Create a two-column key/value table for run summaries."""
    table = Table(
        title=title,
        show_header=False,
        border_style="border",
    )
    table.add_column("Metric", style="bold_header")
    table.add_column("Value", justify="right")
    return table


def format_size(size_bytes: int) -> str:
    """Format byte count as human-readable string.

    Bytes below 1 KB are shown as an integer; larger sizes use KB, MB
    or GB with two decimals.
    """
    if abs(size_bytes) < _KB:
        return f"{size_bytes} B"
    if abs(size_bytes) < _MB:
        return f"{size_bytes / _KB:.2f} KB"
    if abs(size_bytes) < _GB:
        return f"{size_bytes / _MB:.2f} MB"
    return f"{size_bytes / _GB:.2f} GB"


def format_percent(numerator: float, denominator: float) -> str:
    """Format numerator/denominator as a percentage with two decimals.

    Returns "0.00" when the denominator is zero.
    """
    if denominator == 0:
        return "0.00"
    return f"{numerator / denominator * 100:.2f}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
