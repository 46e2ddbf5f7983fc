"""AzureFileSystem — read-only filesystem over an Azure Blob Storage account."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar, cast

from blobfs._base import FileSystem
from blobfs._capabilities import Capability, CapabilitySet
from blobfs._errors import BackendUnavailable, NotAFile, OperationNotImplemented, PathNotFound
from blobfs._models import FileInfo, FileType
from blobfs._path import BlobPath, assert_no_trailing_slash, validate_file_path
from blobfs._reader import BlobInputFile

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import BinaryIO

    from blobfs._config import AzureOptions
    from blobfs._models import FileSelector
    from blobfs._types import BlobServiceClient

T = TypeVar("T")

log = logging.getLogger(__name__)

_AZURE_CAPABILITIES = CapabilitySet({Capability.READ})

_NOT_IMPLEMENTED = "The Azure FileSystem is not fully implemented"


class AzureFileSystem(FileSystem):
    """Filesystem view of one Azure storage account.

    Paths have the form ``container/dir/blob``. Only reading is supported;
    every other operation raises :class:`~blobfs.OperationNotImplemented`.
    Use :meth:`make` to build an instance from :class:`~blobfs.AzureOptions`.

    :param options: Account endpoints and credentials.
    :param service_client: Blob service client to issue requests with.
    """

    def __init__(self, options: AzureOptions, service_client: BlobServiceClient) -> None:
        self._options = options
        self._service_client = service_client

    @classmethod
    def make(cls, options: AzureOptions, *, service_client: BlobServiceClient | None = None) -> AzureFileSystem:
        """Create a filesystem, building the blob service client from ``options``.

        :param service_client: Use this client instead of building one.
        :raises BackendUnavailable: If the service client cannot be created.
        """
        if service_client is None:
            service_client = cls._create_service_client(options)
        log.info("Azure filesystem ready for %s", options.account_blob_url)
        return cls(options, service_client)

    @staticmethod
    def _create_service_client(options: AzureOptions) -> Any:
        from azure.core.exceptions import AzureError
        from azure.storage.blob import BlobServiceClient

        url = options.account_blob_url
        try:
            return BlobServiceClient(account_url=url, credential=options.credential)
        except (ValueError, TypeError, AzureError) as exc:
            raise BackendUnavailable(f"Cannot create blob service client for '{url}': {exc}", url=url) from exc

    @property
    def type_name(self) -> str:
        return "abfs"

    @property
    def capabilities(self) -> CapabilitySet:
        return _AZURE_CAPABILITIES

    @property
    def options(self) -> AzureOptions:
        return self._options

    def __repr__(self) -> str:
        return (
            f"AzureFileSystem(account_blob_url={self._options.account_blob_url!r}, "
            f"credentials_kind={self._options.credentials_kind.value!r})"
        )

    # region: identity

    def equals(self, other: FileSystem) -> bool:
        if self is other:
            return True
        if other.type_name != self.type_name or not isinstance(other, AzureFileSystem):
            return False
        return self._options == other._options

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FileSystem):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.type_name, self._options))

    # endregion

    # region: reading

    def open_input_file(self, target: str | FileInfo) -> BlobInputFile:
        """Open a blob for random-access reading.

        ``target`` is either a ``container/blob`` string or a
        :class:`~blobfs.FileInfo`. A ``FileInfo`` whose type says the path is
        missing or not a file fails without any request, and one with a known
        size skips the properties request.

        :raises InvalidPath: If the path is malformed or has a trailing separator.
        :raises PathNotFound: If the container or blob does not exist.
        :raises NotAFile: If the path names a container or a non-file entry.
        :raises BackendIOError: On any other service failure.
        """
        if isinstance(target, FileInfo):
            return self._open_from_info(target)
        assert_no_trailing_slash(target)
        return self._open(BlobPath.from_string(target))

    def open_input_stream(self, target: str | FileInfo) -> BlobInputFile:
        """Open a blob for sequential reading. Same rules as :meth:`open_input_file`."""
        return self.open_input_file(target)

    def _open_from_info(self, info: FileInfo) -> BlobInputFile:
        assert_no_trailing_slash(info.path)
        if info.type is FileType.NOT_FOUND:
            raise PathNotFound(f"Path does not exist '{info.path}'", path=info.path)
        if info.type not in (FileType.FILE, FileType.UNKNOWN):
            raise NotAFile(f"Not a regular file: '{info.path}'", path=info.path)
        return self._open(BlobPath.from_string(info.path), size=info.size)

    def _open(self, path: BlobPath, size: int | None = None) -> BlobInputFile:
        validate_file_path(path)
        blob_client = self._service_client.get_blob_client(container=path.container, blob=path.path_to_file)
        reader = BlobInputFile(blob_client, path, size=size)
        return reader.init()

    # endregion

    # region: unimplemented operations

    def _not_implemented(self, cap: Capability, operation: str, path: str | None = None) -> NoReturn:
        self.capabilities.require(cap, operation=operation, message=_NOT_IMPLEMENTED, path=path)
        raise OperationNotImplemented(_NOT_IMPLEMENTED, operation=operation, path=path)

    def get_file_info(self, target: str | FileSelector) -> FileInfo | list[FileInfo]:
        if isinstance(target, str):
            self._not_implemented(Capability.METADATA, "get_file_info", target)
        self._not_implemented(Capability.LIST, "get_file_info", target.base_dir)

    def create_dir(self, path: str, *, recursive: bool = True) -> None:
        self._not_implemented(Capability.CREATE_DIR, "create_dir", path)

    def delete_dir(self, path: str) -> None:
        self._not_implemented(Capability.DELETE, "delete_dir", path)

    def delete_dir_contents(self, path: str, *, missing_dir_ok: bool = False) -> None:
        self._not_implemented(Capability.DELETE, "delete_dir_contents", path)

    def delete_root_dir_contents(self) -> None:
        self._not_implemented(Capability.DELETE, "delete_root_dir_contents")

    def delete_file(self, path: str) -> None:
        self._not_implemented(Capability.DELETE, "delete_file", path)

    def move(self, src: str, dest: str) -> None:
        self._not_implemented(Capability.MOVE, "move", src)

    def copy_file(self, src: str, dest: str) -> None:
        self._not_implemented(Capability.COPY, "copy_file", src)

    def open_output_stream(self, path: str, metadata: Mapping[str, str] | None = None) -> BinaryIO:
        self._not_implemented(Capability.WRITE, "open_output_stream", path)

    def open_append_stream(self, path: str, metadata: Mapping[str, str] | None = None) -> BinaryIO:
        self._not_implemented(Capability.APPEND, "open_append_stream", path)

    # endregion

    # region: lifecycle

    def close(self) -> None:
        close = getattr(self._service_client, "close", None)
        if callable(close):
            close()

    def unwrap(self, type_hint: type[T]) -> T:
        try:
            matches = isinstance(self._service_client, type_hint)
        except TypeError:
            # Protocols that are not runtime-checkable
            matches = False
        if matches:
            return cast(T, self._service_client)
        return super().unwrap(type_hint)

    def __enter__(self) -> AzureFileSystem:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # endregion
