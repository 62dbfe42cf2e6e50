"""CLI package for wpslim.

This package contains the Typer application and all subcommands.
"""

from wpslim.cli.main import app

__all__ = ["app"]
