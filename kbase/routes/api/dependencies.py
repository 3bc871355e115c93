from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from kbase import repository
from kbase.dependencies import get_session, get_settings
from kbase.environment import Settings
from kbase.i18n import Translator, normalize_language
from kbase.imports import SqlKnowledgeStore
from kbase.models import Tenant


def get_translator(
    lang: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> Translator:
    return Translator(normalize_language(lang, default=settings.default_language))


def require_tenant(
    tenant_id: str,
    session: Session = Depends(get_session),
    translator: Translator = Depends(get_translator),
) -> Tenant:
    tenant = repository.get_tenant_by_id(session, tenant_id)
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=translator.t("tenants.notFound"),
        )
    return tenant


def get_knowledge_store(session: Session = Depends(get_session)) -> SqlKnowledgeStore:
    return SqlKnowledgeStore(session)
