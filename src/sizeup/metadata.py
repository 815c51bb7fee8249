"""Best-effort filesystem metadata.

Every accessor here returns a safe default instead of raising, so one
unreadable entry can never abort a scan:

- size: 0
- creation and modification time: the current time

Creation time comes from ``st_birthtime`` where the platform provides it
(macOS, BSD, Windows on recent Pythons) and falls back to ``st_ctime``.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryMetadata:
    """Size and timestamps for one entry."""

    size: int
    creation_date: datetime
    modified_date: datetime


def _stat(path: Path) -> os.stat_result | None:
    try:
        return os.stat(path)
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return None


def _creation_timestamp(st: os.stat_result) -> float:
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    return st.st_ctime


def get_file_size(path: Path) -> int:
    """Size in bytes, or 0 if it cannot be read."""
    st = _stat(path)
    return st.st_size if st is not None else 0


def get_creation_date(path: Path) -> datetime:
    """Creation time, or now if it cannot be read."""
    st = _stat(path)
    if st is None:
        return datetime.now()
    return datetime.fromtimestamp(_creation_timestamp(st))


def get_modified_date(path: Path) -> datetime:
    """Last modification time, or now if it cannot be read."""
    st = _stat(path)
    if st is None:
        return datetime.now()
    return datetime.fromtimestamp(st.st_mtime)


def read_metadata(path: Path) -> EntryMetadata:
    """
    Read size and timestamps with a single stat call.

    Args:
        path: Entry to inspect

    Returns:
        EntryMetadata, filled with defaults if the entry is unreadable
    """
    st = _stat(path)
    if st is None:
        now = datetime.now()
        return EntryMetadata(size=0, creation_date=now, modified_date=now)

    return EntryMetadata(
        size=st.st_size,
        creation_date=datetime.fromtimestamp(_creation_timestamp(st)),
        modified_date=datetime.fromtimestamp(st.st_mtime),
    )
