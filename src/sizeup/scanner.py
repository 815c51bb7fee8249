"""Parallel scan engine for sizeup."""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from pathlib import Path
from typing import Callable

from sizeup.aggregator import compute_folder_totals, get_folder_size
from sizeup.metadata import get_file_size, read_metadata
from sizeup.models import AnalysisResult, ErrorKind, FileSystemItem, WalkEntry
from sizeup.walker import walk_tree

logger = logging.getLogger(__name__)


class ScanStrategy(str, Enum):
    """How folder totals are computed."""

    REWALK = "rewalk"  # Re-walk every folder's subtree
    BOTTOM_UP = "bottom_up"  # One pass over the outer walk


def default_max_workers() -> int:
    """Same default as ThreadPoolExecutor."""
    return min(32, (os.cpu_count() or 1) + 4)


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables, make the path absolute and collapse '..'."""
    return Path(os.path.abspath(os.path.expanduser(os.path.expandvars(path))))


class _ItemCollector:
    """Append-only item list shared by the scan workers."""

    def __init__(self) -> None:
        self._items: list[FileSystemItem] = []
        self._lock = threading.Lock()

    def append(self, item: FileSystemItem) -> None:
        with self._lock:
            self._items.append(item)

    def freeze(self) -> list[FileSystemItem]:
        with self._lock:
            return list(self._items)


def scan(
    root: Path,
    size_limit: int,
    max_workers: int | None = None,
    strategy: ScanStrategy = ScanStrategy.REWALK,
    cancel_event: threading.Event | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[FileSystemItem] | None:
    """
    Find every file and folder under root at least size_limit bytes big.

    The root is walked once, then every entry is processed on a thread pool:
    files are checked against the threshold directly, folders get their
    recursive total first. Matching items go into one lock-guarded list
    which is returned once all workers are done.

    Args:
        root: Existing path to scan
        size_limit: Minimum size in bytes for an entry to be reported
        max_workers: Worker threads (default: ThreadPoolExecutor's default)
        strategy: How folder totals are computed
        cancel_event: Checked before each work item
        progress_callback: Optional callback(done, total) after each entry

    Returns:
        Matching items in no particular order, or None if cancel_event was
        set before the scan finished
    """
    workers = max_workers or default_max_workers()
    entries = walk_tree(root)
    logger.debug("Walked %s: %d entries", root, len(entries))

    folder_totals: dict[Path, int] | None = None
    if strategy == ScanStrategy.BOTTOM_UP:
        folder_totals = _bottom_up_totals(entries, workers, cancel_event)
        if folder_totals is None:
            return None

    collector = _ItemCollector()

    def process(entry: WalkEntry) -> None:
        if _is_cancelled(cancel_event):
            return

        metadata = read_metadata(entry.path)
        path_str = str(entry.path)

        if entry.is_file:
            if metadata.size >= size_limit:
                collector.append(FileSystemItem.build(path_str, metadata.size, metadata, True))
        elif entry.is_dir:
            if folder_totals is not None:
                total = folder_totals.get(entry.path, 0)
            else:
                total = get_folder_size(entry.path, cancel_event=cancel_event)
            if total >= size_limit:
                collector.append(FileSystemItem.build(path_str, total, metadata, False))

    total_entries = len(entries)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(process, entry) for entry in entries]
        for done, future in enumerate(as_completed(futures), start=1):
            future.result()
            if progress_callback:
                progress_callback(done, total_entries)
            if _is_cancelled(cancel_event):
                executor.shutdown(wait=True, cancel_futures=True)
                break

    if _is_cancelled(cancel_event):
        return None
    return collector.freeze()


def _is_cancelled(cancel_event: threading.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def _bottom_up_totals(
    entries: list[WalkEntry],
    workers: int,
    cancel_event: threading.Event | None,
) -> dict[Path, int] | None:
    files = [entry.path for entry in entries if entry.is_file]

    def size_of(path: Path) -> int:
        if _is_cancelled(cancel_event):
            return 0
        return get_file_size(path)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        sizes = dict(zip(files, executor.map(size_of, files)))

    if _is_cancelled(cancel_event):
        return None
    return compute_folder_totals(entries, sizes)


def analyze_directory(
    path: str,
    size_limit: int,
    max_workers: int | None = None,
    strategy: ScanStrategy = ScanStrategy.REWALK,
    cancel_event: threading.Event | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> AnalysisResult:
    """
    Analyze a directory and report everything at or above size_limit.

    Errors come back on the result instead of being raised.

    Args:
        path: Directory to analyze (may contain ~)
        size_limit: Threshold in bytes
        max_workers: Worker threads
        strategy: How folder totals are computed
        cancel_event: Set from another thread to stop the scan
        progress_callback: Optional callback(done, total)

    Returns:
        AnalysisResult with items, or with error and error_kind set
    """
    root = expand_path(path)

    if not root.exists():
        logger.warning("Path does not exist: %s", root)
        return AnalysisResult(
            root=str(root),
            size_limit=size_limit,
            error=f"Path does not exist: {path}",
            error_kind=ErrorKind.NOT_FOUND,
        )

    logger.info("Scanning %s (limit %d bytes, strategy %s)", root, size_limit, strategy.value)

    items = scan(
        root,
        size_limit,
        max_workers=max_workers,
        strategy=strategy,
        cancel_event=cancel_event,
        progress_callback=progress_callback,
    )

    if items is None:
        logger.info("Scan of %s cancelled", root)
        return AnalysisResult(
            root=str(root),
            size_limit=size_limit,
            error="Scan cancelled",
            error_kind=ErrorKind.CANCELLED,
        )

    logger.info("Scan of %s found %d items", root, len(items))
    return AnalysisResult(root=str(root), size_limit=size_limit, items=items)
