from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, File, Query, UploadFile

from kbase import exports
from kbase.dependencies import get_settings
from kbase.environment import Settings
from kbase.i18n import Translator
from kbase.imports import (
    DuplicateCheckError,
    ImportFileError,
    ImportPreview,
    ImportRowError,
    ImportWizard,
    SqlKnowledgeStore,
)
from kbase.imports.uploads import check_extension, read_upload_limited
from kbase.models import Tenant

from .dependencies import get_knowledge_store, get_translator, require_tenant
from .schemas import ImportRowErrorPayload
from .utils import (
    attachment_response,
    import_error_http_exception,
    import_result_payload,
    preview_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _select_upload(
    wizard: ImportWizard, file: UploadFile, translator: Translator
) -> ImportPreview:
    filename = file.filename or ""
    try:
        check_extension(filename)
        payload = await read_upload_limited(file, max_bytes=wizard.max_bytes)
        return wizard.select_file(filename, payload)
    except (ImportFileError, DuplicateCheckError) as exc:
        logger.warning("Rejected import upload %r for tenant %s: %s", filename, wizard.tenant_id, exc)
        raise import_error_http_exception(exc, translator, wizard.max_bytes) from exc


@router.get("/import/template")
def download_template(file_format: Literal["csv", "xlsx"] = Query(default="csv", alias="format")):
    if file_format == "xlsx":
        return attachment_response(
            exports.TEMPLATE_XLSX_FILENAME,
            exports.build_xlsx_template(),
            exports.XLSX_MEDIA_TYPE,
        )
    return attachment_response(
        exports.TEMPLATE_CSV_FILENAME, exports.build_csv_template(), "text/csv"
    )


@router.post("/import/error-report")
def download_error_report(errors: list[ImportRowErrorPayload]):
    content = exports.build_error_report_csv(
        ImportRowError(row=error.row, message=error.message) for error in errors
    )
    return attachment_response(exports.ERROR_REPORT_FILENAME, content, "text/csv")


@router.post("/tenants/{tenant_id}/import/preview")
async def preview_import(
    file: UploadFile = File(...),
    tenant: Tenant = Depends(require_tenant),
    store: SqlKnowledgeStore = Depends(get_knowledge_store),
    settings: Settings = Depends(get_settings),
    translator: Translator = Depends(get_translator),
):
    wizard = ImportWizard(store, tenant.id, max_bytes=settings.import_max_bytes)
    preview = await _select_upload(wizard, file, translator)
    return preview_payload(preview)


@router.post("/tenants/{tenant_id}/import")
async def import_file(
    file: UploadFile = File(...),
    tenant: Tenant = Depends(require_tenant),
    store: SqlKnowledgeStore = Depends(get_knowledge_store),
    settings: Settings = Depends(get_settings),
    translator: Translator = Depends(get_translator),
):
    wizard = ImportWizard(store, tenant.id, max_bytes=settings.import_max_bytes)
    await _select_upload(wizard, file, translator)
    return import_result_payload(wizard.start_import())
