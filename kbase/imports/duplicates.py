from __future__ import annotations

import logging
from typing import Iterable, Sequence

from kbase.imports.models import DuplicateCheckError, ParsedRow
from kbase.imports.store import KnowledgeStore
from kbase.imports.validator import normalize_question

logger = logging.getLogger(__name__)


def find_duplicates(
    store: KnowledgeStore, tenant_id: str, questions: Iterable[str]
) -> set[str]:
    """Return the normalized questions that already exist for ``tenant_id``.

    Matching is exact after trimming and lower-casing. A failing lookup raises
    :class:`DuplicateCheckError` instead of reporting zero duplicates.
    """
    wanted = {normalize_question(question) for question in questions if question.strip()}
    if not wanted:
        return set()
    try:
        existing = store.find_existing_questions(tenant_id, sorted(wanted))
    except Exception as exc:
        logger.error("Duplicate check failed for tenant %s: %s", tenant_id, exc)
        raise DuplicateCheckError(f"Duplicate check failed: {exc}") from exc
    return {normalize_question(question) for question in existing} & wanted


def mark_duplicates(rows: Sequence[ParsedRow], duplicates: set[str]) -> None:
    for row in rows:
        row.is_duplicate = row.is_valid and normalize_question(row.data.question) in duplicates


def check_duplicates(
    store: KnowledgeStore, tenant_id: str, rows: Sequence[ParsedRow]
) -> set[str]:
    duplicates = find_duplicates(
        store, tenant_id, [row.data.question for row in rows if row.is_valid]
    )
    mark_duplicates(rows, duplicates)
    return duplicates
