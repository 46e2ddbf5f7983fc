"""Shared test fixtures, in-memory blob service stand-ins and marker registration."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from azure.core.exceptions import AzureError, ResourceNotFoundError

from blobfs._config import AzureOptions
from blobfs._filesystem import AzureFileSystem

ACCOUNT_URL = "https://testaccount.blob.core.windows.net"


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires a running Azurite emulator")


class FakeBlobClient:
    """Stand-in for ``azure.storage.blob.BlobClient`` backed by the service's dict.

    Downloads are cut to ``service.max_chunk`` bytes when it is set.
    """

    def __init__(self, service: FakeBlobService, container: str, blob: str) -> None:
        self._service = service
        self.container = container
        self.blob = blob
        self.url = f"{ACCOUNT_URL}/{container}/{blob}"

    def _lookup(self) -> tuple[bytes, dict[str, str]]:
        if self._service.fail_with is not None:
            raise self._service.fail_with
        blobs = self._service.containers.get(self.container)
        if blobs is None or self.blob not in blobs:
            raise ResourceNotFoundError(message="The specified blob does not exist.")
        return blobs[self.blob]

    def get_blob_properties(self, **kwargs: Any) -> SimpleNamespace:
        self._service.calls.append(("get_blob_properties", self.container, self.blob))
        data, metadata = self._lookup()
        return SimpleNamespace(size=len(data), metadata=dict(metadata))

    def download_blob(self, offset: int | None = None, length: int | None = None, **kwargs: Any) -> SimpleNamespace:
        self._service.calls.append(("download_blob", offset, length))
        data, _ = self._lookup()
        start = offset or 0
        end = len(data) if length is None else start + length
        chunk = data[start:end]
        if self._service.max_chunk is not None:
            chunk = chunk[: self._service.max_chunk]
        return SimpleNamespace(readall=lambda: chunk)


class FakeBlobService:
    """Stand-in for ``azure.storage.blob.BlobServiceClient`` that records every request."""

    def __init__(self) -> None:
        self.containers: dict[str, dict[str, tuple[bytes, dict[str, str]]]] = {}
        self.calls: list[tuple[object, ...]] = []
        self.fail_with: AzureError | None = None
        self.max_chunk: int | None = None
        self.closed = False

    def put(self, container: str, blob: str, data: bytes, metadata: dict[str, str] | None = None) -> None:
        self.containers.setdefault(container, {})[blob] = (data, metadata or {})

    def get_blob_client(self, container: str, blob: str, **kwargs: Any) -> FakeBlobClient:
        return FakeBlobClient(self, container, blob)

    def close(self) -> None:
        self.closed = True


CONTENT = bytes(range(256)) * 4  # 1024 bytes


@pytest.fixture
def service() -> FakeBlobService:
    svc = FakeBlobService()
    svc.put("container", "dir/file.bin", CONTENT, {"owner": "tests", "kind": "binary"})
    svc.put("container", "empty.txt", b"")
    return svc


@pytest.fixture
def options() -> AzureOptions:
    return AzureOptions.from_account_key("testaccount", "c2VjcmV0")


@pytest.fixture
def fs(options: AzureOptions, service: FakeBlobService) -> AzureFileSystem:
    return AzureFileSystem.make(options, service_client=service)


@pytest.fixture
def content() -> bytes:
    return CONTENT
