from __future__ import annotations

import asyncio

import pytest

from kbase.imports import ImportErrorKind, ImportFileError
from kbase.imports.uploads import (
    UploadTooLargeError,
    check_upload,
    describe_upload_limit,
    file_extension,
    read_upload_limited,
)


class _FakeUpload:
    def __init__(self, payload: bytes) -> None:
        self._payload = payload
        self._offset = 0

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._payload) - self._offset
        chunk = self._payload[self._offset : self._offset + size]
        self._offset += len(chunk)
        return chunk


def test_read_upload_limited_returns_payload() -> None:
    payload = b"question,answer\nQ,A\n"

    data = asyncio.run(read_upload_limited(_FakeUpload(payload), max_bytes=64, chunk_size=4))

    assert data == payload


def test_read_upload_limited_stops_past_limit() -> None:
    with pytest.raises(UploadTooLargeError) as excinfo:
        asyncio.run(read_upload_limited(_FakeUpload(b"x" * 10), max_bytes=8, chunk_size=4))

    assert excinfo.value.kind == ImportErrorKind.FILE_TOO_LARGE
    assert excinfo.value.max_bytes == 8


def test_file_extension_is_case_insensitive() -> None:
    assert file_extension("FAQ.XLSX") == "xlsx"
    assert file_extension("archive.tar.csv") == "csv"
    assert file_extension("README") == ""


def test_check_upload_rejects_legacy_excel() -> None:
    with pytest.raises(ImportFileError) as excinfo:
        check_upload("faq.xls", 10)

    assert excinfo.value.kind == ImportErrorKind.INVALID_FORMAT


def test_file_at_exact_limit_is_accepted() -> None:
    assert check_upload("faq.csv", 100, max_bytes=100) == "csv"


def test_describe_upload_limit() -> None:
    assert describe_upload_limit(10 * 1024 * 1024) == "10 MB"
    assert describe_upload_limit(1) == "1 byte"
    assert describe_upload_limit(500) == "500 bytes"
