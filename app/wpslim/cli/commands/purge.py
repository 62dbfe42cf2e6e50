"""Purge list generation and cleanup commands.

Builds the list of purgeable upload images from a database dump and
deletes the listed files after confirmation:

1. All derivative images (-150x150, -scaled) are marked for purging.
2. An original image is only kept if its filename is found in the
   database dump. Otherwise it is marked for purging too.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from wpslim.cli.types import (
    OutputFormat,
    confirm_deletion,
    print_deletion_summary,
    require_config,
)
from wpslim.core.errors import MissingCorpusFileError, WpslimError
from wpslim.core.paths import get_uploads_dir
from wpslim.purge.classifier import build_purge_plan
from wpslim.purge.listing import read_purge_list, write_purge_list, write_summary
from wpslim.purge.models import Classification, PurgePlan, PurgeSummary
from wpslim.purge.operator import PurgeOperator
from wpslim.purge.references import load_reference_set
from wpslim.purge.scanner import UploadsScanner
from wpslim.utils.formatting import (
    console,
    create_summary_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Find and delete unused upload images.",
    no_args_is_help=True,
)


def _is_quiet(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("quiet"))


@app.command()
def scan(
    ctx: typer.Context,
    html_dir: Annotated[
        Path,
        typer.Argument(help="WordPress web root containing wp-content/uploads."),
    ] = Path("html"),
    sql_dump: Annotated[
        Path,
        typer.Argument(help="Database dump to search for image references."),
    ] = Path("wordpress.sql"),
    purge_file: Annotated[
        Path | None,
        typer.Argument(help="Output file for the purge list."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Summary output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    summary_path: Annotated[
        Path | None,
        typer.Option(
            "--summary",
            "-s",
            help="Export the summary record to a JSON file.",
        ),
    ] = None,
    show: Annotated[
        int | None,
        typer.Option(
            "--show",
            "-n",
            help="Also list the first N purgeable images.",
        ),
    ] = None,
) -> None:
    """Build the list of purgeable images.

    Examples:
        wpslim purge scan                                  # html/, wordpress.sql
        wpslim purge scan site/ dump.sql purge.txt
        wpslim purge scan --format json --summary stats.json
    """
    config = require_config()
    quiet = _is_quiet(ctx) or output_format == OutputFormat.JSON
    uploads = get_uploads_dir(html_dir, config.purge.uploads_subdir)
    purge_path = purge_file or Path(config.purge.purge_file)

    try:
        plan = _build_plan(uploads, sql_dump, quiet=quiet)
        write_purge_list(plan.purge_paths, purge_path)
        if summary_path is not None:
            write_summary(plan.summary, summary_path)
    except WpslimError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"I/O error: {e}")
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        data = {"purge_file": str(purge_path), **plan.summary.to_dict()}
        console.print_json(json.dumps(data))
        return

    if plan.is_empty:
        print_info("No images found.")
        _print_summary(plan.summary)
        return

    if show:
        _print_plan_table(plan, limit=show)

    print_success(f"\nList of purgeable images has been saved to: {purge_path}")
    _print_summary(plan.summary, plan)
    console.print(
        "\n[muted]1. All thumbnails (-WxH) and scaled versions (-scaled) were marked as purgeable.\n"
        "2. Original files were marked as purgeable if their filename was not found "
        "in the database.[/muted]"
    )
    console.print(
        f"\nReview '{purge_path}', then delete the files with: "
        f"[bold]wpslim purge clean {purge_path} --html-dir {html_dir}[/bold]"
    )


@app.command()
def clean(
    purge_file: Annotated[
        Path | None,
        typer.Argument(help="Purge list produced by 'wpslim purge scan'."),
    ] = None,
    html_dir: Annotated[
        Path,
        typer.Option("--html-dir", "-d", help="WordPress web root."),
    ] = Path("html"),
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete the images listed in a purge list."""
    config = require_config()
    uploads = get_uploads_dir(html_dir, config.purge.uploads_subdir)
    purge_path = purge_file or Path(config.purge.purge_file)

    try:
        UploadsScanner(uploads).check()
        paths = read_purge_list(purge_path)
    except WpslimError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"Cannot read purge list '{purge_path}': {e}")
        raise typer.Exit(code=1) from e

    if not paths:
        print_info("Purge list is empty. Nothing to delete.")
        return

    console.print(f"{len(paths)} image(s) listed in '{purge_path}' below '{uploads}'.")

    if not dry_run and not yes:
        if not confirm_deletion(len(paths)):
            print_info("Deletion cancelled. No files have been changed.")
            raise typer.Exit(code=0)

    operator = PurgeOperator(root=uploads, dry_run=dry_run)
    results = operator.delete(paths)
    print_deletion_summary(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _build_plan(uploads: Path, sql_dump: Path, *, quiet: bool) -> PurgePlan:
    """Run the scan, extraction and classification steps.

    Raises:
        WpslimError: On missing inputs or an unreadable dump.
        OSError: If the uploads directory cannot be walked.
    """
    scanner = UploadsScanner(uploads)
    scanner.check()
    if not sql_dump.is_file():
        raise MissingCorpusFileError(sql_dump)

    _step(quiet, "(1/4) Finding all image files on disk...")
    listing = list(scanner.scan())
    if not listing:
        return PurgePlan()

    _step(quiet, "(2/4) Extracting image references from the database dump...")
    references = load_reference_set(sql_dump)

    _step(quiet, "(3/4) Classifying thumbnails, scaled images and originals...")
    plan = build_purge_plan(listing, references)

    _step(quiet, "(4/4) Generating final report...")
    return plan


def _step(quiet: bool, message: str) -> None:
    if not quiet:
        console.print(f"[info]-->[/] {message}")


def _print_summary(summary: PurgeSummary, plan: PurgePlan | None = None) -> None:
    """Display the purge summary as a Rich table."""
    table = create_summary_table("Summary")
    table.add_row("Total image files on disk", str(summary.total_images))
    table.add_row("Kept image files", f"[keep]{summary.kept_images}[/keep]")
    table.add_row("Purgeable image files", f"[purge]{summary.purgeable_images}[/purge]")
    if plan is not None:
        table.add_row(
            "  thumbnails / scaled",
            f"[derivative]{plan.count(Classification.DERIVATIVE)}[/derivative]",
        )
        table.add_row(
            "  unreferenced originals",
            str(plan.count(Classification.ORIGINAL_UNREFERENCED)),
        )
    table.add_row("Percentage of files to keep", f"{summary.kept_percentage} %")
    console.print(table)


def _print_plan_table(plan: PurgePlan, limit: int | None = None) -> None:
    """Display purge candidates with their classification."""
    table = Table(title="Purgeable Images", show_lines=False, border_style="border")
    table.add_column("Path", style="bold")
    table.add_column("Reason", style="dim")

    items = plan.purge[:limit] if limit else plan.purge
    for item in items:
        table.add_row(item.path, item.classification.value)

    console.print(table)
