"""Tests for BlobInputFile: lazy init, boundaries, ranged reads and close."""

from __future__ import annotations

import asyncio
import io
from typing import TYPE_CHECKING

import pytest
from azure.core.exceptions import HttpResponseError

from blobfs._errors import BackendIOError, ClosedResource, InvalidArgument, PathNotFound
from blobfs._path import BlobPath
from blobfs._reader import BlobInputFile

if TYPE_CHECKING:
    from conftest import FakeBlobService


def _reader(service: FakeBlobService, path: str = "container/dir/file.bin", size: int | None = None) -> BlobInputFile:
    p = BlobPath.from_string(path)
    return BlobInputFile(service.get_blob_client(container=p.container, blob=p.path_to_file), p, size=size)


class TestInit:
    def test_fetches_size_and_metadata(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        assert f.size() == len(content)
        assert f.read_metadata() == {"owner": "tests", "kind": "binary"}
        assert service.calls == [("get_blob_properties", "container", "dir/file.bin")]

    def test_size_hint_skips_fetch(self, service: FakeBlobService) -> None:
        f = _reader(service, size=1024).init()
        assert f.get_size() == 1024
        assert f.read_metadata() == {}
        assert service.calls == []

    def test_negative_size_hint_rejected(self, service: FakeBlobService) -> None:
        with pytest.raises(InvalidArgument):
            _reader(service, size=-1)

    def test_missing_blob(self, service: FakeBlobService) -> None:
        with pytest.raises(PathNotFound) as exc_info:
            _reader(service, "container/nope").init()
        assert exc_info.value.path == "container/nope"

    def test_missing_container(self, service: FakeBlobService) -> None:
        with pytest.raises(PathNotFound):
            _reader(service, "other/file").init()

    def test_backend_failure_keeps_message(self, service: FakeBlobService) -> None:
        service.fail_with = HttpResponseError(message="Server busy")
        with pytest.raises(BackendIOError) as exc_info:
            _reader(service).init()
        msg = str(exc_info.value)
        assert "When fetching properties for 'https://testaccount.blob.core.windows.net/container/dir/file.bin'" in msg
        assert "Server busy" in msg
        assert isinstance(exc_info.value.__cause__, HttpResponseError)

    def test_size_resolved_lazily(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service)
        assert f.size() == len(content)
        assert len(service.calls) == 1


class TestPositions:
    def test_seek_and_tell(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        assert f.seek(10) == 10
        assert f.tell() == 10
        assert service.calls == [("get_blob_properties", "container", "dir/file.bin")]

    def test_seek_to_end_allowed(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        f.seek(len(content))
        assert f.tell() == len(content)

    def test_seek_negative(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        with pytest.raises(InvalidArgument, match="negative position") as exc_info:
            f.seek(-1)
        assert "(-1)" in str(exc_info.value)

    def test_seek_past_end(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        with pytest.raises(BackendIOError, match="past end of file") as exc_info:
            f.seek(len(content) + 1)
        assert f"position {len(content) + 1}, size {len(content)}" in str(exc_info.value)

    def test_seek_relative(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        f.seek(100)
        assert f.seek(5, io.SEEK_CUR) == 105
        assert f.seek(-4, io.SEEK_END) == len(content) - 4

    def test_seek_bad_whence(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        with pytest.raises(InvalidArgument):
            f.seek(0, 7)


class TestReadAt:
    def test_range(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        assert f.read_at(10, 20) == content[10:30]
        assert service.calls[-1] == ("download_blob", 10, 20)

    def test_does_not_move_cursor(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        f.read_at(10, 20)
        assert f.tell() == 0

    def test_clamped_to_end(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        assert f.read_at(len(content) - 4, 100) == content[-4:]
        assert service.calls[-1] == ("download_blob", len(content) - 4, 4)

    def test_at_end_returns_nothing_without_request(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        calls = len(service.calls)
        assert f.read_at(len(content), 10) == b""
        assert len(service.calls) == calls

    def test_negative_position(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        with pytest.raises(InvalidArgument, match=r"Cannot read from negative position \(-5\)"):
            f.read_at(-5, 10)

    def test_past_end(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        with pytest.raises(BackendIOError, match="Cannot read past end of file") as exc_info:
            f.read_at(len(content) + 1, 10)
        assert exc_info.value.path == "container/dir/file.bin"
        assert f"(position {len(content) + 1}, size {len(content)})" in str(exc_info.value)

    def test_short_read_shrinks_result(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        service.max_chunk = 8
        assert f.read_at(0, 100) == content[:8]

    def test_short_read_into_buffer(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        service.max_chunk = 5
        buf = bytearray(16)
        assert f.readinto_at(100, buf) == 5
        assert bytes(buf[:5]) == content[100:105]
        assert bytes(buf[5:]) == b"\0" * 11
        assert f.tell() == 0

    def test_into_buffer(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        buf = bytearray(16)
        assert f.readinto_at(4, buf) == 16
        assert bytes(buf) == content[4:20]

    def test_into_buffer_with_nbytes(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        buf = bytearray(16)
        assert f.readinto_at(0, buf, 4) == 4
        assert bytes(buf[:4]) == content[:4]
        assert bytes(buf[4:]) == b"\0" * 12

    def test_into_buffer_too_small(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        with pytest.raises(InvalidArgument):
            f.readinto_at(0, bytearray(2), 4)

    def test_download_failure_prefix(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        service.fail_with = HttpResponseError(message="Connection reset")
        with pytest.raises(BackendIOError) as exc_info:
            f.read_at(5, 10)
        msg = str(exc_info.value)
        assert "at position 5 for 10 bytes" in msg
        assert "container/dir/file.bin" in msg
        assert "Connection reset" in msg

    def test_blob_deleted_after_open(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        del service.containers["container"]["dir/file.bin"]
        with pytest.raises(PathNotFound):
            f.read_at(0, 10)


class TestSequentialRead:
    def test_consecutive_reads(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        assert f.read(100) == content[:100]
        assert f.read(100) == content[100:200]
        assert f.tell() == 200

    def test_short_reads_advance_by_bytes_transferred(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        f.seek(len(content) - 10)
        service.max_chunk = 6
        assert f.read(8) == content[-10:-4]
        assert f.tell() == len(content) - 4
        assert f.read(8) == content[-4:]
        assert f.tell() == len(content)
        assert f.read(8) == b""
        assert f.tell() == len(content)

    def test_read_all(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        f.seek(1000)
        assert f.read() == content[1000:]
        assert f.read() == b""

    def test_readinto(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        buf = bytearray(10)
        assert f.readinto(buf) == 10
        assert f.readinto(buf) == 10
        assert bytes(buf) == content[10:20]
        assert f.tell() == 20

    def test_readinto_short_reads_advance_by_bytes_transferred(
        self, service: FakeBlobService, content: bytes
    ) -> None:
        f = _reader(service).init()
        f.seek(len(content) - 10)
        service.max_chunk = 6
        buf = bytearray(8)
        assert f.readinto(buf) == 6
        assert bytes(buf[:6]) == content[-10:-4]
        assert f.tell() == len(content) - 4
        assert f.readinto(buf) == 4
        assert bytes(buf[:4]) == content[-4:]
        assert f.tell() == len(content)
        assert f.readinto(buf) == 0
        assert f.tell() == len(content)

    def test_empty_blob(self, service: FakeBlobService) -> None:
        f = _reader(service, "container/empty.txt").init()
        assert f.size() == 0
        assert f.read(10) == b""
        assert not any(call[0] == "download_blob" for call in service.calls)

    def test_file_object_protocol(self, service: FakeBlobService, content: bytes) -> None:
        f = _reader(service).init()
        assert f.readable()
        assert f.seekable()
        assert not f.writable()
        wrapped = io.BufferedReader(f)
        assert wrapped.read(5) == content[:5]


class TestMetadata:
    def test_async_metadata(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        calls = len(service.calls)
        assert asyncio.run(f.read_metadata_async()) == {"owner": "tests", "kind": "binary"}
        assert len(service.calls) == calls

    def test_metadata_is_a_copy(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        f.read_metadata()["owner"] = "changed"
        assert f.read_metadata()["owner"] == "tests"


class TestClose:
    def test_operations_after_close(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        f.close()
        assert f.closed
        with pytest.raises(ClosedResource):
            f.tell()
        with pytest.raises(ClosedResource):
            f.seek(0)
        with pytest.raises(ClosedResource):
            f.read(1)
        with pytest.raises(ClosedResource):
            f.size()
        with pytest.raises(ClosedResource):
            f.read_at(0, 1)
        with pytest.raises(ClosedResource):
            f.read_metadata()
        with pytest.raises(ClosedResource):
            f.init()

    def test_close_message(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        f.close()
        with pytest.raises(ClosedResource, match="Cannot seek on closed file."):
            f.seek(0)

    def test_close_twice(self, service: FakeBlobService) -> None:
        f = _reader(service).init()
        f.close()
        f.close()
        assert f.closed

    def test_context_manager(self, service: FakeBlobService) -> None:
        with _reader(service).init() as f:
            f.read(1)
        assert f.closed

    def test_repr(self, service: FakeBlobService) -> None:
        assert "container/dir/file.bin" in repr(_reader(service))
