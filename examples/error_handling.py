"""Error handling — catching InvalidPath, PathNotFound, NotAFile, etc.

Demonstrates the normalized error hierarchy and how to handle errors
programmatically using structured attributes. Requires a running Azurite.
"""

from __future__ import annotations

from blobfs import (
    AzureBackend,
    AzureFileSystem,
    AzureOptions,
    BackendIOError,
    BlobFSError,
    ClosedResource,
    FileInfo,
    FileType,
    InvalidPath,
    NotAFile,
    OperationNotImplemented,
    PathNotFound,
)

ACCOUNT_NAME = "devstoreaccount1"
ACCOUNT_KEY = "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="

if __name__ == "__main__":
    options = AzureOptions.from_account_key(ACCOUNT_NAME, ACCOUNT_KEY, backend=AzureBackend.AZURITE)

    with AzureFileSystem.make(options) as fs:
        # --- InvalidPath (URI instead of container/path) ---
        try:
            fs.open_input_file("abfs://sample-container/sample-blob.txt")
        except InvalidPath as exc:
            print(f"InvalidPath: {exc}")
            print(f"  path={exc.path}")

        # --- NotAFile (bare container) ---
        try:
            fs.open_input_file("sample-container")
        except NotAFile as exc:
            print(f"\nNotAFile: {exc}")

        # --- PathNotFound, answered from the hint without a request ---
        try:
            fs.open_input_file(FileInfo("sample-container/gone.txt", type=FileType.NOT_FOUND))
        except PathNotFound as exc:
            print(f"\nPathNotFound: {exc}")

        # --- BackendIOError (reading past the end) ---
        with fs.open_input_file("sample-container/sample-blob.txt") as f:
            try:
                f.read_at(f.size() + 1, 10)
            except BackendIOError as exc:
                print(f"\nBackendIOError: {exc}")

        # --- ClosedResource ---
        try:
            f.tell()
        except ClosedResource as exc:
            print(f"\nClosedResource: {exc}")

        # --- OperationNotImplemented (write paths are not supported) ---
        try:
            fs.delete_file("sample-container/sample-blob.txt")
        except OperationNotImplemented as exc:
            print(f"\nOperationNotImplemented: {exc}")
            print(f"  operation={exc.operation}")

        # --- Catch any blobfs error with the base class ---
        for path in ["sample-container/missing.txt", "/leading-slash"]:
            try:
                fs.open_input_file(path)
            except BlobFSError as exc:
                print(f"\nBlobFSError ({type(exc).__name__}): {exc}")

    print("\nDone!")
