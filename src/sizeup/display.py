"""Rich terminal display for sizeup."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from sizeup.config import Settings
from sizeup.formatting import human_readable_size
from sizeup.models import AnalysisResult, DeleteResult, FileSystemItem

console = Console()

FOLDER_ICON = "📁"
FILE_ICON = "📄"

DATE_FORMAT = "%Y-%m-%d %H:%M"


def item_icon(item: FileSystemItem) -> str:
    """Icon for a file or folder."""
    return FILE_ICON if item.is_file else FOLDER_ICON


def build_items_table(title: str, items: list[FileSystemItem], style: str) -> Table:
    """Table of items, in the order given."""
    table = Table(title=title, show_header=True, header_style=f"bold {style}")
    table.add_column("", width=2)
    table.add_column("Size", justify="right", style=style)
    table.add_column("Modified", justify="right")
    table.add_column("Created", justify="right")
    table.add_column("Path")

    for item in items:
        table.add_row(
            item_icon(item),
            item.size_str,
            item.modified_date.strftime(DATE_FORMAT),
            item.creation_date.strftime(DATE_FORMAT),
            escape(item.path),
        )

    return table


def show_analysis(
    result: AnalysisResult,
    show_files: bool = True,
    show_folders: bool = True,
    limit: int | None = None,
) -> None:
    """Display analysis results, folders then files, largest first."""
    if not result.items:
        console.print("[yellow]No files found matching the criteria.[/yellow]")
        return

    ordered = result.sorted_by_size()
    folders = [item for item in ordered if not item.is_file]
    files = [item for item in ordered if item.is_file]

    if show_folders and folders:
        console.print(build_items_table("Folders", folders[:limit], "cyan"))
        console.print()

    if show_files and files:
        console.print(build_items_table("Files", files[:limit], "green"))
        console.print()

    console.print(
        Panel(
            f"[bold]Root:[/bold] {escape(result.root)}\n"
            f"[bold]Threshold:[/bold] {human_readable_size(result.size_limit)}\n"
            f"  Folders: {len(folders)}\n"
            f"  Files: {len(files)} ({human_readable_size(result.total_file_bytes)})",
            title="Summary",
            border_style="blue",
        )
    )


def show_delete_preview(result: DeleteResult) -> None:
    """Display what a delete would remove."""
    console.print(f"[bold]Target:[/bold] {escape(result.path)}")
    console.print(
        f"  {result.files_deleted} files, {human_readable_size(result.bytes_freed)}"
    )


def show_delete_result(result: DeleteResult) -> None:
    """Display result of a delete operation."""
    if not result.success:
        console.print(f"  [red]✗[/red] {escape(result.path)}: {escape(result.error or '')}")
    elif result.dry_run:
        console.print(
            f"  [yellow]DRY RUN[/yellow] {escape(result.path)}: "
            f"{human_readable_size(result.bytes_freed)} would be freed"
        )
    else:
        console.print(
            f"  [green]✓[/green] {escape(result.path)}: {human_readable_size(result.bytes_freed)} freed"
        )


def show_settings(settings: Settings, location: str) -> None:
    """Display current settings."""
    table = Table(title="Settings", show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Value")

    table.add_row("size_limit", f"{settings.size_limit} ({human_readable_size(settings.size_limit)})")
    table.add_row("max_workers", str(settings.max_workers))
    table.add_row("strategy", settings.strategy.value)
    table.add_row("protected_paths", ", ".join(map(escape, settings.protected_paths)) or "[dim]none[/dim]")

    console.print(table)
    console.print(f"[dim]{escape(location)}[/dim]")


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
