"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from wpslim import __version__
from wpslim.cli.commands import config, convert, purge, ratio
from wpslim.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="wpslim",
    help="Slim down WordPress uploads: purge unused images and convert to AVIF.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wpslim version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """wpslim - Slim down WordPress uploads.

    Find thumbnails and images no longer referenced by the database,
    convert the rest to AVIF and report the savings.
    """
    configure_logging(verbose=verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(purge.app, name="purge")
app.command(name="convert")(convert.convert_images)
app.command(name="ratio")(ratio.compression_ratio)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
