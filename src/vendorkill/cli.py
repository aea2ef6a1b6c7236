"""CLI interface for vendorkill."""

import logging
from typing import Callable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from vendorkill import __version__
from vendorkill.catalog import discover
from vendorkill.cleaner import delete_entries
from vendorkill.display import (
    confirm_action,
    console,
    show_catalog,
    show_deletion_result,
    show_deletion_summary,
    show_error,
    show_none_found,
    show_scanning_progress,
    show_searching,
    show_selection_preview,
    show_thanks,
    show_total,
    show_warnings,
)
from vendorkill.errors import ConfigError, VendorKillError
from vendorkill.filesystem import FileSystem
from vendorkill.models import (
    DEFAULT_MANIFEST,
    DEFAULT_MARKER,
    DEFAULT_MAX_DEPTH,
    DEFAULT_WORKERS,
    ScanConfig,
)
from vendorkill.selection import PromptSelector, Selector

log = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="vendorkill",
    help="Find composer vendor directories and delete the ones you pick.",
    add_completion=False,
)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"vendorkill version {__version__}")
        raise typer.Exit()


def build_config(
    path: Optional[str],
    max_depth: int,
    marker: str = DEFAULT_MARKER,
    manifest: str = DEFAULT_MANIFEST,
    workers: int = DEFAULT_WORKERS,
) -> ScanConfig:
    """Validate command-line values into a ScanConfig."""
    values = {"max_depth": max_depth, "marker": marker, "manifest": manifest, "workers": workers}
    if path is not None:
        values["search_root"] = path
    try:
        return ScanConfig(**values)
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise ConfigError(f"Invalid options: {problems}") from e


def run(
    config: ScanConfig,
    selector: Selector,
    full: bool = False,
    dry_run: bool = False,
    confirm: Callable[[str], bool] = confirm_action,
    fs: Optional[FileSystem] = None,
) -> None:
    """
    Discover, list, select and delete vendor directories.

    Raises:
        VendorKillError: for fatal problems (invalid root, unreadable root)
    """
    show_searching(config.search_root)

    with show_scanning_progress() as progress:
        task = progress.add_task("Measuring vendor directories...", total=None)

        def update_progress(path: str, size_bytes: int) -> None:
            progress.advance(task)

        catalog = discover(config, fs=fs, progress_callback=update_progress)

    console.print()
    show_warnings(catalog.warnings)

    if catalog.is_empty:
        show_none_found()
        show_thanks()
        return

    show_total(catalog.summary)

    if full:
        show_catalog(catalog)
        show_total(catalog.summary)

    indices = selector.select(catalog)
    entries = catalog.resolve(indices)

    if not entries:
        console.print("[yellow]No directories selected, nothing deleted.[/yellow]")
        show_thanks()
        return

    console.print()
    show_selection_preview(entries, dry_run=dry_run)

    if not dry_run:
        console.print()
        if not confirm(f"Permanently delete {len(entries)} selected directories?"):
            console.print("[yellow]Cancelled[/yellow]")
            show_thanks()
            return

    console.print("\n[bold]Deleting...[/bold]")
    summary = delete_entries(entries, dry_run=dry_run, fs=fs, on_result=show_deletion_result)
    show_deletion_summary(summary)
    show_thanks()


@app.command()
def main(
    path: Optional[str] = typer.Argument(
        None, help="The path to search for vendor directories (default: current directory)"
    ),
    maxdepth: int = typer.Option(
        DEFAULT_MAX_DEPTH,
        "--maxdepth",
        min=0,
        envvar="VENDORKILL_MAXDEPTH",
        help="The maximum depth to search for vendor directories",
    ),
    full: bool = typer.Option(False, "--full", help="Show full details"),
    manifest: str = typer.Option(
        DEFAULT_MANIFEST,
        "--manifest",
        envvar="VENDORKILL_MANIFEST",
        help="File that must sit next to a vendor directory",
    ),
    marker: str = typer.Option(DEFAULT_MARKER, "--marker", help="Directory name to look for"),
    jobs: int = typer.Option(DEFAULT_WORKERS, "--jobs", "-j", min=1, help="Parallel size calculations"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v info, -vv debug)"),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Delete composer vendor directories."""
    _setup_logging(verbose)

    try:
        config = build_config(path, maxdepth, marker, manifest, jobs)
        run(config, PromptSelector(), full=full, dry_run=dry_run)
    except VendorKillError as e:
        log.debug("Fatal error", exc_info=True)
        show_error(str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
