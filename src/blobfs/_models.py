"""Immutable file descriptors used as hints and selectors."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class FileType(enum.Enum):
    """Kind of entry a :class:`FileInfo` describes."""

    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"
    FILE = "file"
    DIRECTORY = "directory"


@dataclasses.dataclass(frozen=True)
class FileInfo:
    """Caller-supplied snapshot of what is known about a path.

    Passing one to ``open_input_file`` lets the filesystem skip the
    properties round trip when the type and size are already known.

    :param path: ``container/blob`` path string.
    :param type: Entry type; ``UNKNOWN`` when the caller does not know.
    :param size: Size in bytes, or ``None`` if unknown.
    :param modified_at: Optional last modification time.
    """

    path: str
    type: FileType = FileType.UNKNOWN
    size: int | None = None
    modified_at: datetime | None = None

    @property
    def base_name(self) -> str:
        """Final component of the path."""
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    def is_file(self) -> bool:
        return self.type is FileType.FILE


@dataclasses.dataclass(frozen=True)
class FileSelector:
    """Describes a directory listing request.

    :param base_dir: Directory to list.
    :param allow_not_found: Return nothing instead of failing if missing.
    :param recursive: Descend into subdirectories.
    """

    base_dir: str
    allow_not_found: bool = False
    recursive: bool = False
