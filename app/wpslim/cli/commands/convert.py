"""AVIF conversion command.

Finds, resizes and converts upload images to AVIF, then reports the
file size savings.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from wpslim.avif.converter import AvifConverter, check_tools, find_convertible, remove_existing_avif
from wpslim.avif.models import ConversionReport, ConversionResult
from wpslim.cli.types import OutputFormat, require_config
from wpslim.core.config import ConvertSettings
from wpslim.core.errors import WpslimError
from wpslim.core.paths import get_uploads_dir
from wpslim.utils.formatting import (
    console,
    create_summary_table,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def convert_images(
    ctx: typer.Context,
    html_dir: Annotated[
        Path,
        typer.Argument(help="WordPress web root containing wp-content/uploads."),
    ] = Path("html"),
    max_dimension: Annotated[
        int | None,
        typer.Option("--max-dimension", "-m", min=1, help="Maximum width or height in pixels."),
    ] = None,
    quality: Annotated[
        int | None,
        typer.Option("--quality", min=0, max=100, help="avifenc quality (0-100)."),
    ] = None,
    speed: Annotated[
        int | None,
        typer.Option("--speed", min=0, max=10, help="avifenc speed (0 = smallest files)."),
    ] = None,
    jobs: Annotated[
        str | None,
        typer.Option("--jobs", help="avifenc threads per image ('all' or a number)."),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, max=64, help="Images converted in parallel."),
    ] = None,
    keep_existing: Annotated[
        bool,
        typer.Option("--keep-existing", help="Do not delete existing .avif files first."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Report output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Convert upload images to AVIF.

    Existing .avif files are deleted first so every run starts fresh.

    Examples:
        wpslim convert                         # html/wp-content/uploads
        wpslim convert site/ --max-dimension 2000 --quality 60
        wpslim convert --workers 8 --jobs 2
    """
    config = require_config()
    quiet = bool(ctx.obj and ctx.obj.get("quiet")) or output_format == OutputFormat.JSON
    uploads = get_uploads_dir(html_dir, config.purge.uploads_subdir)

    overrides = {
        "max_dimension": max_dimension,
        "quality": quality,
        "speed": speed,
        "jobs": jobs,
        "workers": workers,
    }
    try:
        settings = ConvertSettings.model_validate(
            {
                **config.convert.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )
    except ValueError as e:
        print_error(f"Invalid conversion settings: {e}")
        raise typer.Exit(code=1) from e

    try:
        check_tools()
        sources = find_convertible(uploads)
        if not keep_existing:
            removed = remove_existing_avif(uploads)
            if not quiet:
                print_info(f"Removed {removed} pre-existing .avif file(s).")
    except WpslimError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"I/O error: {e}")
        raise typer.Exit(code=1) from e

    if not quiet:
        _print_settings(uploads, settings, len(sources))

    if not sources:
        if output_format == OutputFormat.JSON:
            console.print_json(json.dumps(ConversionReport.from_results([]).to_dict()))
        else:
            print_info("No images to convert.")
        return

    converter = AvifConverter(settings)
    results = _run_with_progress(converter, sources, quiet=quiet)
    report = ConversionReport.from_results(results)

    for result in results:
        if not result.success:
            print_warning(f"FAILED to convert '{result.source}': {result.error}")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
    else:
        _print_report(report)

    if report.failed:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _run_with_progress(
    converter: AvifConverter,
    sources: list[Path],
    *,
    quiet: bool,
) -> list[ConversionResult]:
    """Convert all sources, showing a single-line progress bar."""
    if quiet:
        return converter.convert_all(sources)

    with Progress(
        TextColumn("Processing"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("[muted]{task.fields[current]}[/muted]"),
        console=console,
        transient=False,
    ) as progress:
        task = progress.add_task("convert", total=len(sources), current="")

        def advance(result: ConversionResult) -> None:
            progress.update(task, advance=1, current=result.source.name)

        return converter.convert_all(sources, on_result=advance)


def _print_settings(uploads: Path, settings: ConvertSettings, total: int) -> None:
    table = create_summary_table("AVIF Conversion")
    table.add_row("Search directory", str(uploads))
    table.add_row("Max dimension", f"{settings.max_dimension}px")
    table.add_row("AVIF options", " ".join(AvifConverter(settings).encoder_options()))
    table.add_row("Parallel workers", str(settings.workers))
    table.add_row("Images found", str(total))
    console.print(table)


def _print_report(report: ConversionReport) -> None:
    table = create_summary_table("Process Complete")
    table.add_row("Images converted", f"{report.converted} / {report.total_files}")
    table.add_row("Total original size", format_size(report.total_original_size))
    table.add_row("Total AVIF size", format_size(report.total_avif_size))
    table.add_row("Total space saved", format_size(report.saved_size))
    table.add_row("Overall reduction", f"{report.reduction_percentage}%")
    console.print(table)

    if not report.failed:
        print_success(f"All {report.converted} image(s) converted successfully.")
