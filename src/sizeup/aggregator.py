"""Folder size aggregation."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from sizeup.metadata import get_file_size
from sizeup.models import EntryKind, WalkEntry
from sizeup.walker import iter_tree

logger = logging.getLogger(__name__)

# Below this many files a folder is summed inline; a thread pool costs more
# than it saves on small folders.
PARALLEL_THRESHOLD = 256
CHUNK_SIZE = 128


def _sum_sizes(paths: list[Path]) -> int:
    return sum(get_file_size(p) for p in paths)


def _chunks(paths: list[Path], size: int) -> Iterable[list[Path]]:
    for start in range(0, len(paths), size):
        yield paths[start : start + size]


def get_folder_size(
    folder: Path,
    max_workers: int = 4,
    cancel_event: threading.Event | None = None,
) -> int:
    """
    Total size of every regular file below a folder.

    Re-walks the subtree independently of any outer walk and sums file
    sizes on a private thread pool. The pool is never shared with the
    caller, so calling this from inside another pool's worker cannot
    deadlock. Files that cannot be read count as 0; directories and
    symlinks contribute nothing themselves.

    Args:
        folder: Directory to measure
        max_workers: Threads used for the fan-out on large folders
        cancel_event: If set mid-way, stops early and returns a partial sum

    Returns:
        Total bytes
    """
    files = [entry.path for entry in iter_tree(folder) if entry.is_file]

    if len(files) < PARALLEL_THRESHOLD or max_workers <= 1:
        return _sum_sizes(files)

    def sum_chunk(chunk: list[Path]) -> int:
        if cancel_event is not None and cancel_event.is_set():
            return 0
        return _sum_sizes(chunk)

    total = 0
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for partial in executor.map(sum_chunk, _chunks(files, CHUNK_SIZE)):
            total += partial
            if cancel_event is not None and cancel_event.is_set():
                executor.shutdown(wait=False, cancel_futures=True)
                break

    return total


def compute_folder_totals(
    entries: list[WalkEntry],
    file_sizes: dict[Path, int],
) -> dict[Path, int]:
    """
    Folder totals for a whole walk in a single bottom-up pass.

    Each file's size is added to its parent folder, then folders are
    folded into their parents deepest first. Produces the same totals as
    calling get_folder_size() on every folder.

    Args:
        entries: Output of walk_tree() for one root
        file_sizes: Size of every file entry

    Returns:
        Mapping of folder path to total bytes, for every folder entry
    """
    totals: dict[Path, int] = {
        entry.path: 0 for entry in entries if entry.kind == EntryKind.DIR
    }

    for entry in entries:
        if entry.is_file:
            parent = entry.path.parent
            if parent in totals and parent != entry.path:
                totals[parent] += file_sizes.get(entry.path, 0)

    for folder in sorted(totals, key=lambda p: len(p.parts), reverse=True):
        parent = folder.parent
        if parent != folder and parent in totals:
            totals[parent] += totals[folder]

    return totals
