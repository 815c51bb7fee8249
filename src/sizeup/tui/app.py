"""Main TUI application for sizeup."""

from textual.app import App
from textual.binding import Binding

from sizeup.config import Settings
from sizeup.tui.screens import MainScreen


class SizeupApp(App):
    """Interactive disk usage browser."""

    TITLE = "sizeup"
    SUB_TITLE = "Find what is eating your disk"

    CSS = """
    #path-bar {
        height: auto;
    }
    #path-input {
        width: 1fr;
    }
    #loading {
        height: 3;
    }
    #results-table {
        height: 1fr;
    }
    #selection-info {
        height: 1;
        padding: 0 1;
    }
    ConfirmDeleteScreen {
        align: center middle;
    }
    #confirm-dialog {
        width: 70;
        height: auto;
        border: thick $error;
        padding: 1 2;
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
    ]

    def __init__(self, path: str | None = None, settings: Settings | None = None):
        super().__init__()
        self.start_path = path
        self.scan_settings = settings or Settings()

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.push_screen(MainScreen(self.start_path))

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "Enter a path and press Enter, Space to select, D to delete selected, Esc to stop a scan",
            title="Help",
            timeout=5,
        )


def run_tui(path: str | None = None, settings: Settings | None = None) -> None:
    """Run the interactive TUI.

    Args:
        path: Directory to analyze right away
        settings: Threshold, worker and protection settings
    """
    app = SizeupApp(path=path, settings=settings)
    app.run()
