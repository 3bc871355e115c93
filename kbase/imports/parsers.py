from __future__ import annotations

import csv
import io
import logging
import zipfile
from datetime import date, datetime
from typing import Iterable, Protocol, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from kbase.imports.models import (
    ImportErrorKind,
    ImportFileError,
    RawRow,
    RawTable,
)
from kbase.imports.uploads import (
    CSV_EXTENSION,
    IMPORT_UPLOAD_MAX_BYTES,
    XLSX_EXTENSION,
    check_upload,
)

logger = logging.getLogger(__name__)

TEMPLATE_COLUMNS = (
    "question",
    "answer",
    "category",
    "subcategory",
    "keywords",
    "image",
    "video",
)
REQUIRED_COLUMNS = frozenset({"question", "answer"})

# xml.etree and lxml parse errors both derive from SyntaxError.
_XLSX_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    SyntaxError,
    KeyError,
    OSError,
    ValueError,
    TypeError,
)


class FileParser(Protocol):
    def parse(self, payload: bytes) -> RawTable:
        ...


class CsvParser:
    def parse(self, payload: bytes) -> RawTable:
        try:
            text = payload.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportFileError(
                "CSV is not valid UTF-8.", kind=ImportErrorKind.PARSE_ERROR
            ) from exc
        _raise_field_limit(len(payload))
        try:
            records = list(csv.reader(io.StringIO(text, newline="")))
        except csv.Error as exc:
            raise ImportFileError(
                f"Malformed CSV: {exc}", kind=ImportErrorKind.PARSE_ERROR
            ) from exc
        if not records:
            return RawTable()
        headers = _normalize_headers(records[0])
        return RawTable(headers=headers, rows=_build_rows(headers, records[1:]))


class XlsxParser:
    """Reads the first worksheet; its first row is the header."""

    def parse(self, payload: bytes) -> RawTable:
        try:
            workbook = load_workbook(io.BytesIO(payload), read_only=True, data_only=True)
        except _XLSX_ERRORS as exc:
            raise ImportFileError(
                "Spreadsheet could not be read.", kind=ImportErrorKind.PARSE_ERROR
            ) from exc
        # Read-only workbooks parse sheet XML lazily, so iteration can fail too.
        try:
            if not workbook.worksheets:
                return RawTable()
            records = workbook.worksheets[0].iter_rows(values_only=True)
            header = next(records, None)
            if header is None:
                return RawTable()
            headers = _normalize_headers(header)
            return RawTable(headers=headers, rows=_build_rows(headers, records))
        except _XLSX_ERRORS as exc:
            raise ImportFileError(
                "Spreadsheet could not be read.", kind=ImportErrorKind.PARSE_ERROR
            ) from exc
        finally:
            workbook.close()


PARSERS: dict[str, type[FileParser]] = {
    CSV_EXTENSION: CsvParser,
    XLSX_EXTENSION: XlsxParser,
}


def parse_upload(
    filename: str, payload: bytes, *, max_bytes: int = IMPORT_UPLOAD_MAX_BYTES
) -> list[RawRow]:
    extension = check_upload(filename, len(payload), max_bytes=max_bytes)
    table = PARSERS[extension]().parse(payload)
    if not table.rows:
        raise ImportFileError(
            "The file contains no data rows.", kind=ImportErrorKind.EMPTY_FILE
        )
    _require_columns(table.headers, filename)
    logger.debug("Parsed %s data rows from %s", len(table.rows), filename)
    return table.rows


def _raise_field_limit(size: int) -> None:
    # csv caps fields at 128 KiB by default; a field can never exceed the file.
    if csv.field_size_limit() < size:
        csv.field_size_limit(size)


def _require_columns(headers: Sequence[str], filename: str) -> None:
    missing = sorted(REQUIRED_COLUMNS.difference(headers))
    if missing:
        raise ImportFileError(
            f"{filename} is missing required columns: {', '.join(missing)}.",
            kind=ImportErrorKind.PARSE_ERROR,
        )


def _normalize_headers(header: Sequence[object]) -> list[str]:
    return [_cell_text(value).lower() for value in header]


def _build_rows(headers: Sequence[str], records: Iterable[Sequence[object]]) -> list[RawRow]:
    rows: list[RawRow] = []
    # Blank records are skipped but keep their index so positions match the file.
    for row_index, record in enumerate(records, start=1):
        cells = [_cell_text(value) for value in record]
        if not any(cells):
            continue
        values: dict[str, str] = {}
        for position, header in enumerate(headers):
            if not header or header in values:
                continue
            values[header] = cells[position] if position < len(cells) else ""
        rows.append(RawRow(row_index=row_index, values=values))
    return rows


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()
