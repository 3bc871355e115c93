from __future__ import annotations

from typing import Protocol, Sequence

from sqlalchemy.orm import Session

from kbase import repository
from kbase.imports.validator import normalize_question
from kbase.models import KnowledgeItemDraft


class KnowledgeStore(Protocol):
    def find_existing_questions(self, tenant_id: str, questions: Sequence[str]) -> set[str]:
        ...

    def bulk_add_items(self, tenant_id: str, items: Sequence[KnowledgeItemDraft]) -> None:
        ...


class SqlKnowledgeStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_existing_questions(self, tenant_id: str, questions: Sequence[str]) -> set[str]:
        wanted = {normalize_question(question) for question in questions}
        found: set[str] = set()
        for stored in repository.list_question_texts(self._session, tenant_id):
            normalized = normalize_question(stored)
            if normalized in wanted:
                found.add(normalized)
        return found

    def bulk_add_items(self, tenant_id: str, items: Sequence[KnowledgeItemDraft]) -> None:
        repository.bulk_create_knowledge_items(self._session, tenant_id, items)
