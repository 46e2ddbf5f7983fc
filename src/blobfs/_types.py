"""Type aliases and the structural view of the blob service client."""

from __future__ import annotations

from typing import Any, Protocol, Union

Buffer = Union[bytearray, memoryview]  # noqa: UP007
Metadata = dict[str, str]


class BlobProperties(Protocol):
    size: int
    metadata: dict[str, str] | None


class BlobDownload(Protocol):
    def readall(self) -> bytes: ...


class BlobClient(Protocol):
    """The subset of ``azure.storage.blob.BlobClient`` used by the reader."""

    @property
    def url(self) -> str: ...

    def get_blob_properties(self, **kwargs: Any) -> BlobProperties: ...

    def download_blob(self, offset: int | None = None, length: int | None = None, **kwargs: Any) -> BlobDownload: ...


class BlobServiceClient(Protocol):
    """The subset of ``azure.storage.blob.BlobServiceClient`` used by the filesystem."""

    def get_blob_client(self, container: str, blob: str, **kwargs: Any) -> BlobClient: ...
