"""Normalized error hierarchy for blobfs."""

from __future__ import annotations

from typing import Optional


class BlobFSError(Exception):
    """Base class for all blobfs errors.

    :param message: Human-readable error description.
    :param path: The ``container/blob`` path involved in the error, if any.
    :param url: The blob or account URL involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, url: Optional[str] = None) -> None:
        self.path = path
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.url is not None:
            parts.append(f"url={self.url!r}")
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.url is not None:
            args.append(f"url={self.url!r}")
        return f"{cls}({', '.join(args)})"


class InvalidPath(BlobFSError):
    """Raised for malformed path strings, URIs and invalid segments."""


class PathNotFound(BlobFSError):
    """Raised when a container or blob does not exist.

    A 404 from the properties endpoint does not say whether the container or
    the blob is missing, so both surface as this error.
    """


class NotAFile(BlobFSError):
    """Raised when a path names a container or a non-file entry."""


class ClosedResource(BlobFSError):
    """Raised when an operation is attempted on a closed reader."""


class InvalidArgument(BlobFSError):
    """Raised for out-of-domain arguments such as negative positions."""


class BackendIOError(BlobFSError):
    """Raised for reads past the end of a blob and for backend failures.

    :param status_code: HTTP status reported by the service, if known.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, path=path, url=url)


class OperationNotImplemented(BlobFSError):
    """Raised by filesystem operations this adapter does not implement.

    :param operation: The name of the unimplemented operation.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        url: Optional[str] = None,
        operation: str = "",
    ) -> None:
        self.operation = operation
        super().__init__(message, path=path, url=url)

    def __str__(self) -> str:
        base = super().__str__()
        if self.operation:
            return f"{base} | operation={self.operation!r}"
        return base

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else "")]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.url is not None:
            args.append(f"url={self.url!r}")
        if self.operation:
            args.append(f"operation={self.operation!r}")
        return f"{cls}({', '.join(args)})"


class BackendUnavailable(BlobFSError):
    """Raised when the blob service client cannot be created."""
