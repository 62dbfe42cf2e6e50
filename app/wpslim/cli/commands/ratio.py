"""AVIF compression ratio report.

Compares converted images with their originals, prints the overall and
per-file savings, and optionally deletes the originals.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from wpslim.avif.models import CompressionStats, ratio_to_percent
from wpslim.avif.ratio import analyze
from wpslim.cli.types import (
    OutputFormat,
    confirm_deletion,
    print_deletion_summary,
    require_config,
)
from wpslim.core.errors import WpslimError
from wpslim.core.paths import get_uploads_dir
from wpslim.purge.operator import PurgeOperator
from wpslim.utils.formatting import (
    console,
    create_summary_table,
    format_size,
    print_error,
    print_info,
)


def compression_ratio(
    ctx: typer.Context,
    html_dir: Annotated[
        Path,
        typer.Argument(help="WordPress web root containing wp-content/uploads."),
    ] = Path("html"),
    top: Annotated[
        int | None,
        typer.Option("--top", "-t", min=1, help="Number of best compressed images to list."),
    ] = None,
    delete_originals: Annotated[
        bool,
        typer.Option(
            "--delete-originals",
            help="Delete original images that have an AVIF counterpart.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
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
    """Analyze AVIF optimization of converted images."""
    config = require_config()
    uploads = get_uploads_dir(html_dir, config.purge.uploads_subdir)
    top_n = top or config.ratio.top_n
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    try:
        stats = analyze(uploads)
    except WpslimError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"I/O error: {e}")
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(stats.to_dict()))
    elif stats.is_empty:
        print_info("No matching image/.avif pairs were found in the directory.")
        return
    else:
        _print_report(stats, top_n, uploads, quiet=quiet)

    if not delete_originals or stats.is_empty:
        return

    if not quiet:
        console.print(
            f"\nThe analysis found {stats.pair_count} original images "
            "that have an AVIF counterpart."
        )
    if not dry_run and not yes:
        console.print("The next step will [error]PERMANENTLY DELETE[/error] these original files.")
        if not confirm_deletion(stats.pair_count):
            print_info("Deletion cancelled by user. No files have been changed.")
            raise typer.Exit(code=0)

    operator = PurgeOperator(dry_run=dry_run)
    results = operator.delete([str(p.original) for p in stats.pairs])
    print_deletion_summary(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_report(stats: CompressionStats, top_n: int, uploads: Path, *, quiet: bool) -> None:
    """Print the summary tables, plus the header and top-N list unless quiet."""
    if not quiet:
        console.print(f"Analysis based on {stats.pair_count} image pairs found.\n")

    overall = create_summary_table("Overall Size Comparison")
    overall.add_row("Total size of original images", format_size(stats.total_original_size))
    overall.add_row("Total size of AVIF images", format_size(stats.total_avif_size))
    overall.add_row("Total space saved", format_size(stats.saved_size))
    overall.add_row("Overall optimization rate", f"{stats.optimization_rate}%")
    console.print(overall)

    distribution = create_summary_table("Optimization Rate Distribution")
    labels = {50: "50% Low (Median)", 10: "10% Low (Top 10%)", 1: " 1% Low (Top 1%)"}
    for percent, value in stats.percentiles().items():
        distribution.add_row(
            labels.get(percent, f"{percent}% Low"),
            f"best {percent}% optimized by at least {value}%",
        )
    console.print(distribution)

    if quiet:
        return

    table = Table(
        title=f"Top {top_n} Images by Compression Ratio",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Reduction", justify="right")
    table.add_column("Original Sz", justify="right")
    table.add_column("AVIF Sz", justify="right")
    table.add_column("File")
    for ratio, pair in stats.top(top_n):
        table.add_row(
            f"{ratio_to_percent(ratio)}%",
            format_size(pair.original_size),
            format_size(pair.avif_size),
            pair.original.relative_to(uploads).as_posix(),
        )
    console.print(table)
