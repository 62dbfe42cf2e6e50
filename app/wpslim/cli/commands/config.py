"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from wpslim.cli.types import require_config
from wpslim.core.config import ConfigError, WpslimConfig, config_to_dict, save_config
from wpslim.core.paths import get_config_path
from wpslim.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the wpslim configuration.",
    no_args_is_help=True,
)


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Config file to read."),
    ] = None,
) -> None:
    """Print the effective configuration as TOML."""
    config_path = path or get_config_path()
    config = require_config(config_path)

    source = str(config_path) if config_path.exists() else "built-in defaults"
    print_info(f"# Source: {source}")
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command()
def init(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    config_path = path or get_config_path()

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        written = save_config(WpslimConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")
