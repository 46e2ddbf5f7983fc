"""Read-only filesystem adapter for Azure Blob Storage."""

from blobfs._base import FileSystem
from blobfs._capabilities import Capability, CapabilitySet
from blobfs._config import AzureBackend, AzureCredentialsKind, AzureOptions
from blobfs._errors import (
    BackendIOError,
    BackendUnavailable,
    BlobFSError,
    ClosedResource,
    InvalidArgument,
    InvalidPath,
    NotAFile,
    OperationNotImplemented,
    PathNotFound,
)
from blobfs._filesystem import AzureFileSystem
from blobfs._models import FileInfo, FileSelector, FileType
from blobfs._path import BlobPath
from blobfs._reader import BlobInputFile

__version__ = "0.1.0"

__all__ = [
    # Core
    "AzureFileSystem",
    "FileSystem",
    "BlobInputFile",
    # Path & Models
    "BlobPath",
    "FileInfo",
    "FileSelector",
    "FileType",
    # Capabilities
    "Capability",
    "CapabilitySet",
    # Config
    "AzureOptions",
    "AzureBackend",
    "AzureCredentialsKind",
    # Errors
    "BlobFSError",
    "InvalidPath",
    "PathNotFound",
    "NotAFile",
    "ClosedResource",
    "InvalidArgument",
    "BackendIOError",
    "OperationNotImplemented",
    "BackendUnavailable",
    # Version
    "__version__",
]
