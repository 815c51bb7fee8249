"""Recursive directory walking.

Uses os.scandir instead of pathlib.rglob() for speed. Symlinks are reported
but never followed, so link cycles cannot trap the walk.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Generator

from sizeup.models import EntryKind, WalkEntry

logger = logging.getLogger(__name__)


def _entry_kind(entry: os.DirEntry) -> EntryKind:
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.DIR
    if entry.is_file(follow_symlinks=False):
        return EntryKind.FILE
    return EntryKind.OTHER


def _mode_kind(mode: int) -> EntryKind:
    if stat.S_ISDIR(mode):
        return EntryKind.DIR
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def iter_tree(root: Path) -> Generator[WalkEntry, None, None]:
    """
    Lazily yield the root and every entry below it.

    Unreadable entries and directories are skipped instead of aborting
    the walk. A symlinked root is followed; links below it are not.
    A root that cannot be read yields nothing.

    Args:
        root: Directory (or file) to walk

    Yields:
        WalkEntry for the root first, then descendants in no particular order
    """
    try:
        root_kind = _mode_kind(os.stat(root).st_mode)
    except OSError as e:
        logger.debug("Cannot read root %s: %s", root, e)
        return

    yield WalkEntry(path=root, kind=root_kind)
    if root_kind != EntryKind.DIR:
        return

    # Explicit stack: deep trees must not hit the recursion limit
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        kind = _entry_kind(entry)
                    except OSError as e:
                        logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
                        continue

                    entry_path = Path(entry.path)
                    yield WalkEntry(path=entry_path, kind=kind)
                    if kind == EntryKind.DIR:
                        pending.append(entry_path)
        except OSError as e:
            # Permission denied, or removed while we were walking
            logger.debug("Skipping unreadable directory %s: %s", directory, e)


def walk_tree(root: Path) -> list[WalkEntry]:
    """Materialize iter_tree() into a list."""
    return list(iter_tree(root))
