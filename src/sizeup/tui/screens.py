"""TUI screens for sizeup."""

import threading
from pathlib import Path

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.coordinate import Coordinate
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    LoadingIndicator,
    Static,
)

from sizeup.deleter import delete_path, drop_nested_paths
from sizeup.display import item_icon
from sizeup.formatting import human_readable_size
from sizeup.models import AnalysisResult, DeleteResult, ErrorKind
from sizeup.scanner import analyze_directory


class MainScreen(Screen):
    """Path input plus the table of large files and folders."""

    BINDINGS = [
        Binding("space", "toggle_select", "Select"),
        Binding("d", "delete_selected", "Delete Selected"),
        Binding("u", "deselect_all", "Deselect All"),
        Binding("escape", "cancel_scan", "Stop Scan"),
    ]

    def __init__(self, start_path: str | None = None):
        super().__init__()
        self.start_path = start_path
        self.result: AnalysisResult | None = None
        self.selected: set[str] = set()
        self._cancel_event: threading.Event | None = None

    def compose(self) -> ComposeResult:
        yield Header()

        with Vertical():
            with Horizontal(id="path-bar"):
                yield Input(
                    value=self.start_path or "",
                    placeholder="Directory to analyze",
                    id="path-input",
                )
                yield Button("Analyze", variant="primary", id="analyze-btn")
            yield LoadingIndicator(id="loading")
            yield DataTable(id="results-table")
            yield Static("", id="selection-info")

        yield Footer()

    def on_mount(self) -> None:
        """Initialize the screen."""
        self.query_one("#loading", LoadingIndicator).display = False

        table = self.query_one("#results-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("", "", "Size", "Path")

        if self.start_path:
            self.start_scan()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "analyze-btn":
            self.start_scan()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.start_scan()

    def start_scan(self) -> None:
        """Validate the input and scan in a background thread."""
        path = self.query_one("#path-input", Input).value.strip()
        if not path:
            self.notify("Please enter a valid directory path.", severity="warning")
            return

        if self._cancel_event is not None:
            self._cancel_event.set()
        cancel_event = threading.Event()
        self._cancel_event = cancel_event

        self.query_one("#loading", LoadingIndicator).display = True
        self.run_worker(
            lambda: self._scan(path, cancel_event),
            thread=True,
            exclusive=True,
        )

    def _scan(self, path: str, cancel_event: threading.Event) -> None:
        settings = self.app.scan_settings
        result = analyze_directory(
            path,
            settings.size_limit,
            max_workers=settings.max_workers,
            strategy=settings.strategy,
            cancel_event=cancel_event,
        )
        self.app.call_from_thread(self._show_result, result)

    def _show_result(self, result: AnalysisResult) -> None:
        self.query_one("#loading", LoadingIndicator).display = False

        if result.error_kind == ErrorKind.CANCELLED:
            self.notify("Scan stopped", timeout=2)
            return
        if not result.success:
            self.notify(f"Error analyzing directory: {escape(result.error or '')}", severity="error")
            return

        self.result = result
        self.selected.clear()
        self._update_table()
        self.notify(f"Found {len(result.items)} items", timeout=2)

    def _update_table(self) -> None:
        """Rebuild the table from the current result."""
        table = self.query_one("#results-table", DataTable)
        table.clear()

        if not self.result:
            return

        if not self.result.items:
            self.query_one("#selection-info", Static).update(
                "[dim]No files found matching the criteria.[/dim]"
            )
            return

        for item in self.result.sorted_by_size():
            checkbox = "[green]X[/green]" if item.path in self.selected else "[ ]"
            table.add_row(checkbox, item_icon(item), item.size_str, Text(item.path), key=item.path)

        self._update_selection_info()

    def _update_selection_info(self) -> None:
        info = self.query_one("#selection-info", Static)
        if not self.selected:
            info.update("[dim]No items selected[/dim]")
            return

        total = sum(item.size for item in self.result.items if item.path in self.selected)
        info.update(
            f"[bold]{len(self.selected)}[/bold] selected: [cyan]{human_readable_size(total)}[/cyan]"
        )

    def action_toggle_select(self) -> None:
        """Toggle selection of the highlighted row."""
        table = self.query_one("#results-table", DataTable)
        if not self.result or table.row_count == 0:
            return

        row = table.cursor_row
        path = str(table.coordinate_to_cell_key(Coordinate(row, 0)).row_key.value)
        if path in self.selected:
            self.selected.remove(path)
        else:
            self.selected.add(path)

        self._update_table()
        table.move_cursor(row=row)

    def action_deselect_all(self) -> None:
        self.selected.clear()
        self._update_table()

    def action_cancel_scan(self) -> None:
        if self._cancel_event is not None:
            self._cancel_event.set()

    def action_delete_selected(self) -> None:
        """Confirm, then delete the selected items."""
        if not self.selected:
            self.notify("No items selected", severity="warning")
            return

        paths = drop_nested_paths(self.selected)

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self.run_worker(lambda: self._delete(paths), thread=True)

        self.app.push_screen(ConfirmDeleteScreen(paths), on_confirm)

    def _delete(self, paths: list[str]) -> None:
        protected = self.app.scan_settings.protected_paths
        results = [delete_path(path, protected_paths=protected) for path in paths]
        self.app.call_from_thread(self._show_delete_results, results)

    def _show_delete_results(self, results: list[DeleteResult]) -> None:
        removed = [Path(r.path) for r in results if r.success]

        def is_removed(item_path: str) -> bool:
            path = Path(item_path)
            return any(path == gone or path.is_relative_to(gone) for gone in removed)

        if self.result:
            self.result = self.result.model_copy(
                update={"items": [i for i in self.result.items if not is_removed(i.path)]}
            )
        self.selected = {p for p in self.selected if not is_removed(p)}
        self._update_table()

        freed = sum(r.bytes_freed for r in results if r.success)
        for failure in (r for r in results if not r.success):
            self.notify(f"{escape(failure.path)}: {escape(failure.error or '')}", severity="error", timeout=5)
        self.notify(f"Deleted {len(removed)} items, {human_readable_size(freed)} freed", timeout=5)


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Yes/no dialog before deleting."""

    BINDINGS = [
        Binding("y", "confirm", "Yes, Delete"),
        Binding("n", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, paths: list[str]):
        super().__init__()
        self.paths = paths

    def compose(self) -> ComposeResult:
        listing = "\n".join(escape(p) for p in self.paths[:10])
        if len(self.paths) > 10:
            listing += f"\n... and {len(self.paths) - 10} more"

        with Vertical(id="confirm-dialog"):
            yield Static(f"[bold red]Delete {len(self.paths)} items permanently?[/bold red]")
            yield Static(listing)
            with Horizontal():
                yield Button("Delete", variant="error", id="btn-delete")
                yield Button("Cancel", variant="default", id="btn-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-delete":
            self.action_confirm()
        else:
            self.action_cancel()

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
