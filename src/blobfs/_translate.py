"""Map ``azure-core`` exceptions onto the blobfs error hierarchy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from azure.core.exceptions import AzureError, ResourceNotFoundError

from blobfs._errors import BackendIOError, BlobFSError, PathNotFound

if TYPE_CHECKING:
    from collections.abc import Iterator

_HTTP_NOT_FOUND = 404


def error_from_backend(prefix: str, exc: AzureError, path: str, *, url: str | None = None) -> BlobFSError:
    """Classify a failed service call.

    A 404 becomes :class:`PathNotFound`; the service does not say whether the
    container or the blob was missing. Anything else becomes
    :class:`BackendIOError` carrying ``prefix`` and the service message.
    """
    status_code = getattr(exc, "status_code", None)
    if isinstance(exc, ResourceNotFoundError) or status_code == _HTTP_NOT_FOUND:
        return PathNotFound(f"Path does not exist '{path}'", path=path, url=url)
    message = getattr(exc, "message", None) or str(exc)
    return BackendIOError(f"{prefix} Azure Error: {message}", path=path, url=url, status_code=status_code)


@contextmanager
def translate_errors(prefix: str, path: str, *, url: str | None = None) -> Iterator[None]:
    """Convert Azure SDK exceptions raised inside the block."""
    try:
        yield
    except BlobFSError:
        raise
    except AzureError as exc:
        raise error_from_backend(prefix, exc, path, url=url) from exc
