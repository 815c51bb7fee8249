"""Interactive TUI for sizeup (needs the tui extra)."""

from sizeup.tui.app import SizeupApp, run_tui

__all__ = ["SizeupApp", "run_tui"]
