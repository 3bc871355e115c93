from __future__ import annotations

import logging

from kbase.imports.duplicates import check_duplicates
from kbase.imports.executor import execute_import
from kbase.imports.models import ImportPreview, ImportResult
from kbase.imports.parsers import parse_upload
from kbase.imports.store import KnowledgeStore
from kbase.imports.uploads import IMPORT_UPLOAD_MAX_BYTES
from kbase.imports.validator import validate_rows

logger = logging.getLogger(__name__)


def prepare_import(
    store: KnowledgeStore,
    tenant_id: str,
    filename: str,
    payload: bytes,
    *,
    max_bytes: int = IMPORT_UPLOAD_MAX_BYTES,
) -> ImportPreview:
    rows = validate_rows(parse_upload(filename, payload, max_bytes=max_bytes))
    check_duplicates(store, tenant_id, rows)
    preview = ImportPreview(filename=filename, rows=rows)
    logger.info(
        "Import preview for tenant %s from %s: valid=%s invalid=%s duplicates=%s",
        tenant_id,
        filename,
        preview.valid_count,
        preview.invalid_count,
        preview.duplicate_count,
    )
    return preview


def run_import(store: KnowledgeStore, tenant_id: str, preview: ImportPreview) -> ImportResult:
    result = execute_import(store, tenant_id, preview.rows)
    logger.info(
        "Import for tenant %s from %s finished: success=%s skipped=%s failed=%s",
        tenant_id,
        preview.filename,
        result.success,
        result.skipped,
        result.failed,
    )
    return result
