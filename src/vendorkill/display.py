"""Rich terminal display for vendorkill."""

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from vendorkill.catalog import summarize
from vendorkill.models import Catalog, DeletionResult, DeletionSummary, RunSummary, ScanWarning, VendorEntry
from vendorkill.sizes import format_size

console = Console()


def show_searching(path: str) -> None:
    console.print(f"[bold blue]🔍 Searching for vendor directories in {escape(path)}...[/bold blue]")


def show_scanning_progress() -> Progress:
    """Create spinner for the scan and size calculation."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn("{task.completed} measured"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def show_warnings(warnings: list[ScanWarning] | tuple[ScanWarning, ...]) -> None:
    """Display non-fatal scan and size problems."""
    for warning in warnings:
        console.print(f"[yellow]! {escape(warning.path)}: {escape(warning.message)}[/yellow]")
    if warnings:
        console.print()


def show_total(summary: RunSummary) -> None:
    """Display count and total size of found directories."""
    table = Table(show_header=False, box=None, expand=True, padding=(0, 0))
    table.add_column("Found", style="bold green")
    table.add_column("Total", justify="right", style="bold green")
    table.add_row(f"🥳 Found {summary.count} vendor directories", summary.total_human)
    console.print(table)
    console.print()


def show_none_found() -> None:
    console.print("[green]🥳 No composer vendor directories found in this path.[/green]")


def show_catalog(catalog: Catalog) -> None:
    """Display every entry with its number, size and path."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Project", style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Path")

    for entry in catalog.entries:
        size = entry.size_human
        if entry.size_partial:
            size = f"[yellow]≥ {size}[/yellow]"
        table.add_row(str(entry.index), escape(entry.project_name), size, escape(entry.path))

    console.print(table)
    console.print()


def show_selection_preview(entries: list[VendorEntry], dry_run: bool = False) -> None:
    """Display the itemized list of directories about to be deleted."""
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    console.print("[bold]Directories to delete:[/bold]")
    for entry in entries:
        console.print(f"  [red]✗[/red] {entry.index}: {escape(entry.project_name)} ({entry.size_human}) {escape(entry.path)}")
    summary = summarize(entries)
    console.print(f"\n[bold]Total to delete: {summary.total_human}[/bold]")


def show_deletion_result(result: DeletionResult) -> None:
    """Display result of a single deletion."""
    if result.success:
        verb = "Would delete" if result.dry_run else "Deleted"
        console.print(f"  [green]✓[/green] {verb} {escape(result.path)}")
    else:
        console.print(f"  [red]✗[/red] {escape(result.path)}: {escape(result.error or '')}")


def show_deletion_summary(summary: DeletionSummary) -> None:
    """Display totals after deletion."""
    dry_run = any(r.dry_run for r in summary.results)

    console.print()
    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Space that would be freed" if dry_run else "Space freed", format_size(summary.total_bytes_freed))
    table.add_row("Directories deleted" if not dry_run else "Directories selected", str(summary.success_count))
    if summary.failure_count > 0:
        table.add_row("[red]Failed[/red]", str(summary.failure_count))

    console.print(table)


def show_error(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")


def show_thanks() -> None:
    console.print()
    console.print("💖 [blue]Thanks for using vendorkill![/blue]")


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message, console=console)
