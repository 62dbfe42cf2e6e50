"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from wpslim.core.config import ConfigError, WpslimConfig, load_config
from wpslim.purge.operator import DeletionResult
from wpslim.utils.formatting import console, print_error, print_info, print_success, print_warning


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def require_config(path: Path | None = None) -> WpslimConfig:
    """Load configuration or exit with a helpful error message.

    Args:
        path: Optional custom config path.

    Returns:
        Loaded configuration (defaults if no file exists).

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    try:
        return load_config(path)
    except ConfigError as e:
        print_error(f"Failed to load configuration: {e}")
        print_info("Run 'wpslim config init --force' to reset it.")
        raise typer.Exit(code=1) from e


def confirm_deletion(count: int, noun: str = "file") -> bool:
    """Ask for explicit confirmation before deleting files (default: No)."""
    return typer.confirm(
        f"\nAre you sure you want to permanently delete these {count} {noun}(s)?",
        default=False,
    )


def print_deletion_summary(results: list[DeletionResult]) -> None:
    """Display counts of deleted, skipped and failed files."""
    deleted = sum(1 for r in results if r.success and not r.dry_run)
    would_delete = sum(1 for r in results if r.success and r.dry_run)
    skipped = sum(1 for r in results if r.skipped)
    failed = [r for r in results if r.failed]

    for r in results:
        if r.skipped:
            print_warning(f"File not found, skipping: {r.path}")
    for r in failed:
        print_error(f"Failed to delete {r.path}: {r.error or 'Unknown error'}")

    if would_delete:
        print_info(f"Dry-run: {would_delete} file(s) would be deleted.")
        return

    parts = [f"[success]{deleted} deleted[/success]"]
    if skipped:
        parts.append(f"[warning]{skipped} skipped[/warning]")
    if failed:
        parts.append(f"[error]{len(failed)} failed[/error]")
    console.print(f"\nDeletion complete: {', '.join(parts)}")

    if not failed and not skipped:
        print_success(f"All {deleted} file(s) were removed.")
