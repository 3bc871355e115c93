from __future__ import annotations

from typing import Iterable, Mapping, Optional

from kbase.imports.models import ParsedRow, RawRow
from kbase.models import DEFAULT_CATEGORY, KnowledgeItemDraft


def validate_row(raw: Mapping[str, str], row_index: int) -> ParsedRow:
    errors: list[str] = []

    question = _clean(raw.get("question"))
    if not question:
        errors.append("Question is required")
    answer = _clean(raw.get("answer"))
    if not answer:
        errors.append("Answer is required")

    data = KnowledgeItemDraft(
        question=question,
        answer=answer,
        category=_clean(raw.get("category")) or DEFAULT_CATEGORY,
        subcategory=_clean(raw.get("subcategory")),
        keywords=_clean(raw.get("keywords")),
        image=_clean(raw.get("image")),
        video=_clean(raw.get("video")),
    )
    return ParsedRow(row_index=row_index, data=data, is_valid=not errors, errors=errors)


def validate_rows(rows: Iterable[RawRow]) -> list[ParsedRow]:
    return [validate_row(row.values, row.row_index) for row in rows]


def normalize_question(question: str) -> str:
    return question.strip().lower()


def _clean(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value).strip()
