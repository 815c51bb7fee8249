"""CLI interface for sizeup."""

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sizeup import __version__
from sizeup.config import config_file, load_settings, save_settings, update_setting
from sizeup.deleter import delete_path
from sizeup.display import (
    confirm_action,
    console,
    show_analysis,
    show_delete_preview,
    show_delete_result,
    show_scanning_progress,
    show_settings,
)
from sizeup.formatting import human_readable_size, parse_size
from sizeup.scanner import ScanStrategy, analyze_directory

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="sizeup",
    help="Find the biggest files and folders under a directory",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"sizeup version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def size_callback(value: Optional[str]) -> Optional[int]:
    """Turn '10KB'-style option values into bytes."""
    if value is None:
        return None
    try:
        return parse_size(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
) -> None:
    """sizeup - find what is eating your disk."""
    setup_logging(verbose)


@app.command()
def analyze(
    path: str = typer.Argument(..., help="Directory to analyze"),
    min_size: Optional[str] = typer.Option(
        None,
        "--min-size",
        "-s",
        help="Only report entries at least this big (e.g. 4096, 10KB, 1.5GB)",
        callback=size_callback,
    ),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Worker threads"),
    strategy: Optional[ScanStrategy] = typer.Option(
        None, "--strategy", help="How folder totals are computed"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print items as JSON"),
    files_only: bool = typer.Option(False, "--files-only", help="Only show files"),
    folders_only: bool = typer.Option(False, "--folders-only", help="Only show folders"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Show at most N rows per table"
    ),
) -> None:
    """Analyze disk usage of a directory."""
    if files_only and folders_only:
        console.print("[red]Error: --files-only and --folders-only are exclusive[/red]")
        raise typer.Exit(1)

    settings = load_settings()
    size_limit = min_size if min_size is not None else settings.size_limit

    if as_json:
        result = analyze_directory(
            path,
            size_limit,
            max_workers=workers or settings.max_workers,
            strategy=strategy or settings.strategy,
        )
    else:
        console.print(
            f"[bold blue]Analyzing {escape(path)} (entries >= {human_readable_size(size_limit)})...[/bold blue]\n"
        )
        with show_scanning_progress() as progress:
            task = progress.add_task("Scanning...", total=None)

            def update_progress(done: int, total: int):
                progress.update(task, completed=done, total=total)

            result = analyze_directory(
                path,
                size_limit,
                max_workers=workers or settings.max_workers,
                strategy=strategy or settings.strategy,
                progress_callback=update_progress,
            )

    if not result.success:
        console.print(f"[red]Error analyzing directory: {escape(result.error or '')}[/red]")
        raise typer.Exit(1)

    if as_json:
        items = result.sorted_by_size()
        if files_only:
            items = [item for item in items if item.is_file]
        elif folders_only:
            items = [item for item in items if not item.is_file]
        typer.echo(json.dumps([item.model_dump(mode="json") for item in items[:limit]], indent=2))
        return

    console.print()
    show_analysis(result, show_files=not folders_only, show_folders=not files_only, limit=limit)


@app.command()
def delete(
    path: str = typer.Argument(..., help="File or directory to delete"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
) -> None:
    """Delete a file, or a directory and everything in it."""
    settings = load_settings()

    preview = delete_path(path, dry_run=True, protected_paths=settings.protected_paths)
    if not preview.success:
        show_delete_result(preview)
        raise typer.Exit(1)

    if dry_run:
        console.print("[yellow]DRY RUN - Nothing will be deleted[/yellow]\n")
        show_delete_result(preview)
        return

    show_delete_preview(preview)
    if not yes and not confirm_action("Delete permanently?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    result = delete_path(path, protected_paths=settings.protected_paths)
    show_delete_result(result)
    if not result.success:
        raise typer.Exit(1)


@app.command()
def greet(name: str = typer.Argument(..., help="Who to greet")) -> None:
    """Say hello (checks the install works)."""
    logger.debug("Hello, %r!", name)
    console.print(f"Hello, {escape(name)}! You've been greeted from Python!")


@app.command()
def config(
    set_values: Optional[list[str]] = typer.Option(
        None, "--set", help="Change a setting, as KEY=VALUE (repeatable)"
    ),
) -> None:
    """Show or change settings."""
    settings = load_settings()
    location = config_file()

    for assignment in set_values or []:
        key, sep, value = assignment.partition("=")
        if not sep:
            console.print(f"[red]Expected KEY=VALUE, got: {escape(assignment)}[/red]")
            raise typer.Exit(1)

        key = key.strip()
        value = value.strip()
        if key == "size_limit":
            try:
                value = str(parse_size(value))
            except ValueError as e:
                console.print(f"[red]{escape(str(e))}[/red]")
                raise typer.Exit(1)

        try:
            settings = update_setting(settings, key, value)
        except KeyError:
            console.print(f"[red]Unknown setting: {escape(key)}[/red]")
            raise typer.Exit(1)
        except ValueError as e:
            console.print(f"[red]Invalid value for {escape(key)}: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if set_values:
        if not save_settings(settings, location):
            console.print(f"[red]Could not write {escape(str(location))}[/red]")
            raise typer.Exit(1)
        console.print("[green]Settings saved[/green]")

    show_settings(settings, str(location))


@app.command()
def tui(
    path: Optional[str] = typer.Argument(None, help="Directory to analyze on start"),
) -> None:
    """Launch interactive TUI interface."""
    try:
        from sizeup.tui import run_tui
    except ImportError:
        console.print("[red]TUI not available.[/red]")
        console.print("Install with: [bold]pip install sizeup[tui][/bold]")
        raise typer.Exit(1)

    run_tui(path=path, settings=load_settings())


if __name__ == "__main__":
    app()
