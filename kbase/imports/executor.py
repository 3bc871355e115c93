from __future__ import annotations

import logging
from typing import Sequence

from kbase.imports.models import ImportResult, ImportRowError, ParsedRow
from kbase.imports.store import KnowledgeStore

logger = logging.getLogger(__name__)

BATCH_ERROR_ROW = 0


def execute_import(
    store: KnowledgeStore, tenant_id: str, rows: Sequence[ParsedRow]
) -> ImportResult:
    importable = [row for row in rows if row.is_importable]
    skipped = sum(1 for row in rows if row.is_duplicate)
    invalid = [row for row in rows if not row.is_valid]

    success = 0
    failed = len(invalid)
    errors: list[ImportRowError] = []

    if importable:
        try:
            store.bulk_add_items(tenant_id, [row.data for row in importable])
        except Exception as exc:
            logger.error(
                "Batch import of %s items failed for tenant %s: %s",
                len(importable),
                tenant_id,
                exc,
            )
            failed += len(importable)
            errors.append(
                ImportRowError(row=BATCH_ERROR_ROW, message=str(exc) or type(exc).__name__)
            )
        else:
            success = len(importable)

    errors.extend(
        ImportRowError(row=row.row_index, message="; ".join(row.errors)) for row in invalid
    )
    return ImportResult(
        success=success, skipped=skipped, failed=failed, errors=tuple(errors)
    )
