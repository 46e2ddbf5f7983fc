"""Quickstart — open a blob and read it with random access.

Demonstrates:
- Building AzureOptions for the Azurite emulator
- Creating an AzureFileSystem
- Sequential reads, seeks and ranged reads

Requires a running Azurite (``azurite --silent``) with a container named
``sample-container`` holding ``sample-blob.txt``.
"""

from __future__ import annotations

from blobfs import AzureBackend, AzureFileSystem, AzureOptions, FileInfo, FileType

ACCOUNT_NAME = "devstoreaccount1"
ACCOUNT_KEY = "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="

if __name__ == "__main__":
    options = AzureOptions.from_account_key(ACCOUNT_NAME, ACCOUNT_KEY, backend=AzureBackend.AZURITE)

    with AzureFileSystem.make(options) as fs:
        with fs.open_input_file("sample-container/sample-blob.txt") as f:
            print(f"Size: {f.size()} bytes")
            print(f"Metadata: {f.read_metadata()}")

            # Sequential reads advance the cursor
            print(f"First 5 bytes: {f.read(5)!r}")
            print(f"Cursor: {f.tell()}")

            # Ranged reads leave the cursor alone
            print(f"Bytes 6-10: {f.read_at(6, 5)!r}")

            f.seek(0)
            print(f"Everything: {f.read()!r}")

        # A FileInfo with a known size skips the properties request
        info = FileInfo("sample-container/sample-blob.txt", type=FileType.FILE, size=12)
        with fs.open_input_file(info) as f:
            print(f"Tail: {f.read_at(6, 100)!r}")

    print("Done!")
