"""Data models for sizeup."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

from sizeup.formatting import human_readable_size

if TYPE_CHECKING:
    from sizeup.metadata import EntryMetadata


class ErrorKind(str, Enum):
    """Kinds of errors reported back to the caller."""

    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"
    BLOCKED = "blocked"  # Protected path, refused before touching disk
    CANCELLED = "cancelled"


class EntryKind(str, Enum):
    """Type of a directory entry as seen by the walker."""

    FILE = "file"
    DIR = "dir"
    OTHER = "other"  # Symlinks, sockets, FIFOs, devices


@dataclass(frozen=True)
class WalkEntry:
    """A single entry produced by the tree walker."""

    path: Path
    kind: EntryKind

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIR


class FileSystemItem(BaseModel):
    """A file or folder that met the size threshold."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path as encountered during the walk")
    size: int = Field(..., ge=0, description="File size, or recursive total for a folder")
    size_str: str = Field(..., description="Human-readable rendering of size")
    creation_date: datetime = Field(..., description="Best-effort creation time")
    modified_date: datetime = Field(..., description="Best-effort last modification time")
    is_file: bool = Field(..., description="True for files, False for folders")

    @classmethod
    def build(
        cls,
        path: str,
        size: int,
        metadata: "EntryMetadata",
        is_file: bool,
    ) -> "FileSystemItem":
        """Create an item whose size_str is always derived from size."""
        return cls(
            path=path,
            size=size,
            size_str=human_readable_size(size),
            creation_date=metadata.creation_date,
            modified_date=metadata.modified_date,
            is_file=is_file,
        )


class AnalysisResult(BaseModel):
    """Outcome of analyzing a directory."""

    root: str = Field(..., description="Root path that was analyzed")
    size_limit: int = Field(0, ge=0, description="Threshold in bytes")
    items: list[FileSystemItem] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Error message if the scan failed")
    error_kind: Optional[ErrorKind] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def files(self) -> list[FileSystemItem]:
        """File items only."""
        return [item for item in self.items if item.is_file]

    @property
    def folders(self) -> list[FileSystemItem]:
        """Folder items only."""
        return [item for item in self.items if not item.is_file]

    @property
    def total_file_bytes(self) -> int:
        """Bytes held by the reported files."""
        return sum(item.size for item in self.files)

    def sorted_by_size(self) -> list[FileSystemItem]:
        """Items largest first."""
        return sorted(self.items, key=lambda item: item.size, reverse=True)


class DeleteResult(BaseModel):
    """Result of a delete operation."""

    path: str = Field(..., description="Path that was deleted")
    success: bool = Field(True, description="Whether the deletion succeeded")
    bytes_freed: int = Field(0, description="Bytes freed by the deletion")
    files_deleted: int = Field(0, description="Number of files removed")
    error: Optional[str] = Field(None, description="Error message if failed")
    error_kind: Optional[ErrorKind] = None
    dry_run: bool = Field(False, description="Whether this was a dry run")
