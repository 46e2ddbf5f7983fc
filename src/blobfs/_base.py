"""FileSystem abstract base class — the generic filesystem contract."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, BinaryIO, TypeVar

from blobfs._errors import OperationNotImplemented

if TYPE_CHECKING:
    import io
    from collections.abc import Mapping

    from blobfs._capabilities import CapabilitySet
    from blobfs._models import FileInfo, FileSelector

T = TypeVar("T")


class FileSystem(abc.ABC):
    """Abstract base class for hierarchical-path filesystems.

    Implementations must provide every method. Operations a filesystem does
    not support raise :class:`~blobfs.OperationNotImplemented` at call time,
    and ``capabilities`` tells callers in advance which ones those are.
    Backend-native exceptions must never leak.
    """

    @property
    @abc.abstractmethod
    def type_name(self) -> str:
        """Identifier of the filesystem type (e.g. ``'abfs'``)."""

    @property
    @abc.abstractmethod
    def capabilities(self) -> CapabilitySet:
        """Declared capabilities of this filesystem."""

    @abc.abstractmethod
    def equals(self, other: FileSystem) -> bool:
        """Return ``True`` if ``other`` addresses the same storage the same way."""

    @abc.abstractmethod
    def get_file_info(self, target: str | FileSelector) -> FileInfo | list[FileInfo]:
        """Describe one path, or every entry matched by a selector."""

    @abc.abstractmethod
    def create_dir(self, path: str, *, recursive: bool = True) -> None:
        """Create a directory."""

    @abc.abstractmethod
    def delete_dir(self, path: str) -> None:
        """Delete a directory and its contents."""

    @abc.abstractmethod
    def delete_dir_contents(self, path: str, *, missing_dir_ok: bool = False) -> None:
        """Delete a directory's contents but not the directory itself."""

    @abc.abstractmethod
    def delete_root_dir_contents(self) -> None:
        """Delete everything under the filesystem root."""

    @abc.abstractmethod
    def delete_file(self, path: str) -> None:
        """Delete a file."""

    @abc.abstractmethod
    def move(self, src: str, dest: str) -> None:
        """Move or rename a file or directory."""

    @abc.abstractmethod
    def copy_file(self, src: str, dest: str) -> None:
        """Copy a file."""

    @abc.abstractmethod
    def open_input_stream(self, target: str | FileInfo) -> io.RawIOBase:
        """Open a file for sequential reading."""

    @abc.abstractmethod
    def open_input_file(self, target: str | FileInfo) -> io.RawIOBase:
        """Open a file for random-access reading."""

    @abc.abstractmethod
    def open_output_stream(self, path: str, metadata: Mapping[str, str] | None = None) -> BinaryIO:
        """Open a file for writing, truncating any existing content."""

    @abc.abstractmethod
    def open_append_stream(self, path: str, metadata: Mapping[str, str] | None = None) -> BinaryIO:
        """Open a file for appending."""

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

    def unwrap(self, type_hint: type[T]) -> T:
        """Return the native client if it matches the requested type.

        :param type_hint: The expected type (e.g. ``azure.storage.blob.BlobServiceClient``).
        :raises OperationNotImplemented: If no such handle is available.
        """
        raise OperationNotImplemented(
            f"FileSystem '{self.type_name}' does not expose native handle of type {type_hint.__name__}.",
            operation="unwrap",
        )
