"""BlobInputFile — seekable, read-only view of a single blob."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, cast

from blobfs._errors import BackendIOError, ClosedResource, InvalidArgument
from blobfs._translate import translate_errors

if TYPE_CHECKING:
    from blobfs._path import BlobPath
    from blobfs._types import BlobClient, Buffer, Metadata

log = logging.getLogger(__name__)


class BlobInputFile(io.RawIOBase):
    """Random-access binary reader over one blob.

    Size and metadata are fetched by :meth:`init` (one properties request)
    unless ``size`` is given up front. Every read issues a single ranged
    download; nothing is buffered between calls. Instances are not safe for
    concurrent use.

    :param blob_client: Client for the blob. May be shared with other readers.
    :param path: Parsed path of the blob, used in error messages.
    :param size: Known blob size in bytes. Skips the properties request.
    :raises InvalidArgument: If ``size`` is negative.
    """

    def __init__(self, blob_client: BlobClient, path: BlobPath, size: int | None = None) -> None:
        super().__init__()
        self._closed = False
        self._client: BlobClient | None = blob_client
        self._path = path
        self._url = blob_client.url
        self._content_length = size
        self._metadata: Metadata = {}
        self._pos = 0
        if size is not None and size < 0:
            raise InvalidArgument(f"Blob size cannot be negative ({size})", path=str(path))

    def __repr__(self) -> str:
        return f"BlobInputFile(path={self._path.full_path!r}, closed={self._closed})"

    @property
    def path(self) -> BlobPath:
        return self._path

    @property
    def url(self) -> str:
        return self._url

    # region: lifecycle

    def init(self) -> BlobInputFile:
        """Resolve size and metadata, unless the size was supplied.

        :raises PathNotFound: If the container or blob does not exist.
        :raises BackendIOError: On any other service failure.
        """
        self._check_closed("init")
        if self._content_length is not None:
            return self
        client = cast("BlobClient", self._client)
        log.debug("Fetching properties for %s", self._url)
        with translate_errors(f"When fetching properties for '{self._url}': ", self._path.full_path, url=self._url):
            properties = client.get_blob_properties()
        self._content_length = int(properties.size)
        self._metadata = dict(properties.metadata or {})
        return self

    def close(self) -> None:
        """Release the blob client. Calling it again has no effect."""
        self._client = None
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    # endregion

    # region: checks

    def _check_closed(self, action: str) -> None:
        if self._closed:
            raise ClosedResource(f"Cannot {action} on closed file.", path=self._path.full_path)

    def _length(self) -> int:
        if self._content_length is None:
            self.init()
        return cast(int, self._content_length)

    def _check_position(self, position: int, action: str) -> None:
        if position < 0:
            raise InvalidArgument(f"Cannot {action} from negative position ({position})", path=self._path.full_path)
        length = self._length()
        if position > length:
            raise BackendIOError(
                f"Cannot {action} past end of file (position {position}, size {length})",
                path=self._path.full_path,
                url=self._url,
            )

    # endregion

    # region: io.RawIOBase

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def tell(self) -> int:
        self._check_closed("tell")
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the cursor. Never touches the network once the size is known.

        :raises InvalidArgument: If the target position is negative.
        :raises BackendIOError: If the target position is past the end.
        """
        self._check_closed("seek")
        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._pos + offset
        elif whence == io.SEEK_END:
            position = self._length() + offset
        else:
            raise InvalidArgument(f"Invalid whence ({whence})", path=self._path.full_path)
        self._check_position(position, "seek")
        self._pos = position
        return position

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the cursor; ``-1`` reads to the end."""
        self._check_closed("read")
        if size is None or size < 0:
            size = self._length() - self._pos
        data = self.read_at(self._pos, size)
        self._pos += len(data)
        return data

    def readall(self) -> bytes:
        return self.read(-1)

    def readinto(self, buffer: Buffer) -> int:  # type: ignore[override]
        """Fill ``buffer`` from the cursor and advance by the bytes transferred."""
        bytes_read = self.readinto_at(self._pos, buffer)
        self._pos += bytes_read
        return bytes_read

    # endregion

    # region: random access

    def size(self) -> int:
        """Blob size in bytes."""
        self._check_closed("size")
        return self._length()

    get_size = size

    def read_metadata(self) -> Metadata:
        """User-defined metadata fetched with the blob properties.

        Empty when the reader was opened with a known size.
        """
        self._check_closed("read metadata")
        return dict(self._metadata)

    async def read_metadata_async(self) -> Metadata:
        """Awaitable form of :meth:`read_metadata`. Completes without suspending."""
        return self.read_metadata()

    def readinto_at(self, position: int, buffer: Buffer, nbytes: int | None = None) -> int:
        """Download ``[position, position + nbytes)`` into ``buffer``.

        ``nbytes`` defaults to ``len(buffer)`` and is clamped to the bytes
        remaining in the blob. Reading at the end of the blob returns ``0``
        without a request.

        :returns: Number of bytes the service actually returned.
        :raises BackendIOError: If the download fails.
        """
        self._check_closed("read")
        self._check_position(position, "read")
        view = memoryview(buffer).cast("B")
        if nbytes is None:
            nbytes = len(view)
        elif nbytes > len(view):
            raise InvalidArgument(
                f"Buffer of {len(view)} bytes cannot hold {nbytes} bytes", path=self._path.full_path
            )
        nbytes = min(nbytes, self._length() - position)
        if nbytes <= 0:
            return 0

        client = cast("BlobClient", self._client)
        log.debug("Downloading %s bytes at offset %s from %s", nbytes, position, self._url)
        prefix = f"When reading from '{self._url}' at position {position} for {nbytes} bytes: "
        with translate_errors(prefix, self._path.full_path, url=self._url):
            data = client.download_blob(offset=position, length=nbytes).readall()
        bytes_read = min(len(data), nbytes)
        if bytes_read < nbytes:
            log.warning("Short read from %s: requested %s bytes, got %s", self._url, nbytes, bytes_read)
        view[:bytes_read] = data[:bytes_read]
        return bytes_read

    def read_at(self, position: int, nbytes: int) -> bytes:
        """Return up to ``nbytes`` bytes starting at ``position``.

        Does not move the cursor.
        """
        self._check_closed("read")
        self._check_position(position, "read")
        nbytes = max(0, min(nbytes, self._length() - position))
        buffer = bytearray(nbytes)
        if nbytes > 0:
            bytes_read = self.readinto_at(position, buffer)
            del buffer[bytes_read:]
        return bytes(buffer)

    # endregion
