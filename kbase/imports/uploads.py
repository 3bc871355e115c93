from __future__ import annotations

from typing import Protocol

from kbase.imports.models import ImportErrorKind, ImportFileError

IMPORT_UPLOAD_CHUNK_SIZE = 64 * 1024
IMPORT_UPLOAD_MAX_BYTES = 10 * 1024 * 1024

CSV_EXTENSION = "csv"
XLSX_EXTENSION = "xlsx"
ALLOWED_EXTENSIONS = (CSV_EXTENSION, XLSX_EXTENSION)


class UploadTooLargeError(ImportFileError):
    """Raised when an uploaded file exceeds the configured size limit."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            f"File exceeds maximum size of {describe_upload_limit(max_bytes)}.",
            kind=ImportErrorKind.FILE_TOO_LARGE,
        )
        self.max_bytes = max_bytes


class UploadLike(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


def file_extension(filename: str) -> str:
    _, dot, extension = filename.rpartition(".")
    return extension.strip().lower() if dot else ""


def check_extension(filename: str) -> str:
    extension = file_extension(filename)
    if extension not in ALLOWED_EXTENSIONS:
        raise ImportFileError(
            "Unsupported file format. Please use CSV or XLSX.",
            kind=ImportErrorKind.INVALID_FORMAT,
        )
    return extension


def check_upload(filename: str, size: int, *, max_bytes: int = IMPORT_UPLOAD_MAX_BYTES) -> str:
    extension = check_extension(filename)
    if size > max_bytes:
        raise UploadTooLargeError(max_bytes)
    return extension


async def read_upload_limited(
    upload: UploadLike,
    *,
    max_bytes: int = IMPORT_UPLOAD_MAX_BYTES,
    chunk_size: int = IMPORT_UPLOAD_CHUNK_SIZE,
) -> bytes:
    if max_bytes < 0:
        raise ValueError("max_bytes must be non-negative")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise UploadTooLargeError(max_bytes)
        chunks.append(chunk)

    return b"".join(chunks)


def describe_upload_limit(max_bytes: int) -> str:
    mb = 1024 * 1024
    if max_bytes % mb == 0 and max_bytes >= mb:
        return f"{max_bytes // mb} MB"
    if max_bytes == 1:
        return "1 byte"
    return f"{max_bytes} bytes"
