"""File and folder deletion for sizeup."""

import logging
import os
from pathlib import Path
from typing import Iterable

from sizeup.aggregator import get_folder_size
from sizeup.metadata import get_file_size
from sizeup.models import DeleteResult, ErrorKind
from sizeup.scanner import expand_path
from sizeup.walker import iter_tree

logger = logging.getLogger(__name__)


def is_path_safe(path: Path, protected_paths: list[str] | None = None) -> bool:
    """
    Check if a path may be deleted.

    The filesystem root, the home directory and any protected path
    (exact match) are refused. Paths inside them are allowed. Both sides
    are compared lexically normalized and with symlinks resolved, so
    'home/sub/..' or a link to home is refused too.

    Args:
        path: Absolute path to check
        protected_paths: Extra paths to refuse (supports ~)

    Returns:
        True if safe to delete, False otherwise
    """
    candidates = {Path(os.path.normpath(path)), path.resolve()}

    blocked = {Path(path.anchor), Path(path.resolve().anchor)}
    for guarded in [Path.home()] + [expand_path(p) for p in protected_paths or []]:
        blocked.add(guarded)
        blocked.add(guarded.resolve())

    return not candidates & blocked


def drop_nested_paths(paths: Iterable[str]) -> list[str]:
    """
    Sorted paths, without any path that lies inside another one given.

    Deleting a folder removes its contents, so deleting them separately
    afterwards would only report them as missing.
    """
    kept: list[Path] = []
    for candidate in sorted({expand_path(p) for p in paths}, key=lambda p: len(p.parts)):
        if not any(candidate.is_relative_to(parent) for parent in kept):
            kept.append(candidate)
    return sorted(str(p) for p in kept)


def delete_non_empty_dir(path: Path) -> None:
    """
    Remove a directory and everything in it, depth first.

    Files of a directory go first, then its subdirectories (recursively),
    then the directory itself. Symlinks are unlinked, never followed.
    Not transactional: a failure part-way leaves the rest in place.

    Raises:
        OSError: If any removal fails
    """
    subdirs = []
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(Path(entry.path))
            else:
                os.remove(entry.path)

    for subdir in subdirs:
        delete_non_empty_dir(subdir)

    os.rmdir(path)


def delete_path(
    path: str,
    dry_run: bool = False,
    protected_paths: list[str] | None = None,
) -> DeleteResult:
    """
    Delete a file, or a directory with all its contents.

    Args:
        path: Path to delete (may contain ~)
        dry_run: If True, only measure what would be freed
        protected_paths: Extra paths to refuse

    Returns:
        DeleteResult; failures are reported on it, never raised
    """
    target = expand_path(path)

    if not os.path.lexists(target):
        return DeleteResult(
            path=str(target),
            success=False,
            error=f"Path does not exist: {path}",
            error_kind=ErrorKind.NOT_FOUND,
            dry_run=dry_run,
        )

    if not is_path_safe(target, protected_paths):
        logger.warning("Refusing to delete protected path %s", target)
        return DeleteResult(
            path=str(target),
            success=False,
            error=f"Blocked path: {target}",
            error_kind=ErrorKind.BLOCKED,
            dry_run=dry_run,
        )

    is_dir = target.is_dir() and not target.is_symlink()

    # Measure before deleting
    if is_dir:
        size = get_folder_size(target)
        files = sum(1 for entry in iter_tree(target) if not entry.is_dir)
    else:
        size = get_file_size(target)
        files = 1

    if dry_run:
        return DeleteResult(path=str(target), bytes_freed=size, files_deleted=files, dry_run=True)

    try:
        if is_dir:
            delete_non_empty_dir(target)
            logger.info("Directory '%s' and all its contents deleted", target)
        else:
            target.unlink()
            logger.info("File '%s' deleted", target)
    except PermissionError as e:
        logger.warning("Failed to delete %s: %s", target, e)
        return DeleteResult(
            path=str(target),
            success=False,
            error=f"Permission denied: {e}",
            error_kind=ErrorKind.IO_ERROR,
        )
    except OSError as e:
        logger.warning("Failed to delete %s: %s", target, e)
        return DeleteResult(
            path=str(target),
            success=False,
            error=f"OS error: {e}",
            error_kind=ErrorKind.IO_ERROR,
        )

    return DeleteResult(path=str(target), bytes_freed=size, files_deleted=files)
