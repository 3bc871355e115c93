from __future__ import annotations

from dataclasses import asdict

from fastapi import HTTPException, status
from fastapi.responses import Response

from kbase.i18n import Translator
from kbase.imports import (
    DuplicateCheckError,
    ImportErrorKind,
    ImportFileError,
    ImportPreview,
    ImportResult,
    ParsedRow,
)
from kbase.imports.uploads import describe_upload_limit

# Plain codes: the 413 and 422 constant names changed between Starlette releases.
_ERROR_STATUS = {
    ImportErrorKind.INVALID_FORMAT: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ImportErrorKind.FILE_TOO_LARGE: 413,
    ImportErrorKind.EMPTY_FILE: 422,
    ImportErrorKind.PARSE_ERROR: 422,
}

_ERROR_MESSAGE_KEYS = {
    ImportErrorKind.INVALID_FORMAT: "bulkImport.invalidFormat",
    ImportErrorKind.FILE_TOO_LARGE: "bulkImport.fileTooLarge",
    ImportErrorKind.EMPTY_FILE: "bulkImport.emptyFile",
    ImportErrorKind.PARSE_ERROR: "bulkImport.parseError",
}

DUPLICATE_CHECK_FAILED = "DuplicateCheckFailed"


def import_error_http_exception(
    exc: ImportFileError | DuplicateCheckError,
    translator: Translator,
    max_bytes: int,
) -> HTTPException:
    if isinstance(exc, DuplicateCheckError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "kind": DUPLICATE_CHECK_FAILED,
                "message": translator.t("bulkImport.duplicateCheckFailed"),
                "reason": str(exc),
            },
        )
    return HTTPException(
        status_code=_ERROR_STATUS[exc.kind],
        detail={
            "kind": exc.kind.value,
            "message": translator.t(
                _ERROR_MESSAGE_KEYS[exc.kind], limit=describe_upload_limit(max_bytes)
            ),
            "reason": str(exc),
        },
    )


def row_payload(row: ParsedRow) -> dict[str, object]:
    return {
        "row_index": row.row_index,
        "data": asdict(row.data),
        "is_valid": row.is_valid,
        "is_duplicate": row.is_duplicate,
        "errors": list(row.errors),
    }


def preview_payload(preview: ImportPreview) -> dict[str, object]:
    return {
        "filename": preview.filename,
        "total": preview.total,
        "valid_count": preview.valid_count,
        "invalid_count": preview.invalid_count,
        "duplicate_count": preview.duplicate_count,
        "rows": [row_payload(row) for row in preview.rows],
    }


def import_result_payload(result: ImportResult) -> dict[str, object]:
    return {
        "success": result.success,
        "skipped": result.skipped,
        "failed": result.failed,
        "errors": [asdict(error) for error in result.errors],
    }


def attachment_response(filename: str, content: str | bytes, media_type: str) -> Response:
    response = Response(content=content, media_type=media_type)
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
