"""CLI commands for wpslim.

This package contains all subcommand implementations.
"""

from wpslim.cli.commands import config, convert, purge, ratio

__all__ = ["config", "convert", "purge", "ratio"]
