from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from kbase import exports, repository
from kbase.dependencies import get_session
from kbase.i18n import Translator
from kbase.models import Tenant

from .dependencies import get_translator, require_tenant
from .schemas import KnowledgeItemCreate, KnowledgeItemUpdate
from .utils import attachment_response

logger = logging.getLogger(__name__)

router = APIRouter()


def _item_not_found(translator: Translator) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=translator.t("knowledgeItems.notFound"),
    )


@router.get("/tenants/{tenant_id}/items")
def list_items(
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
):
    return [asdict(item) for item in repository.list_knowledge_items(session, tenant.id)]


@router.post("/tenants/{tenant_id}/items", status_code=status.HTTP_201_CREATED)
def create_item(
    payload: KnowledgeItemCreate,
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
):
    item = repository.create_knowledge_item(session, tenant.id, payload.to_draft())
    return asdict(item)


@router.get("/tenants/{tenant_id}/categories")
def list_categories(
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
):
    return [asdict(summary) for summary in repository.list_categories(session, tenant.id)]


@router.get("/tenants/{tenant_id}/items/export")
def export_items(
    file_format: Literal["csv", "xlsx"] = Query(default="csv", alias="format"),
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
):
    items = repository.list_knowledge_items(session, tenant.id)
    if file_format == "xlsx":
        return attachment_response(
            exports.EXPORT_XLSX_FILENAME,
            exports.export_items_xlsx(items),
            exports.XLSX_MEDIA_TYPE,
        )
    return attachment_response(
        exports.EXPORT_CSV_FILENAME, exports.export_items_csv(items), "text/csv"
    )


@router.get("/tenants/{tenant_id}/items/{item_id}")
def get_item(
    item_id: str,
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
    translator: Translator = Depends(get_translator),
):
    item = repository.get_knowledge_item(session, tenant.id, item_id)
    if item is None:
        raise _item_not_found(translator)
    return asdict(item)


@router.patch("/tenants/{tenant_id}/items/{item_id}")
def update_item(
    item_id: str,
    payload: KnowledgeItemUpdate,
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
    translator: Translator = Depends(get_translator),
):
    item = repository.update_knowledge_item(
        session,
        tenant.id,
        item_id,
        question=payload.question,
        answer=payload.answer,
        category=payload.category,
        subcategory=payload.subcategory,
        keywords=payload.keywords,
        image=payload.image,
        video=payload.video,
    )
    if item is None:
        raise _item_not_found(translator)
    return asdict(item)


@router.delete("/tenants/{tenant_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: str,
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
    translator: Translator = Depends(get_translator),
):
    if not repository.delete_knowledge_item(session, tenant.id, item_id):
        raise _item_not_found(translator)
    logger.info("Deleted knowledge item %s for tenant %s", item_id, tenant.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/tenants/{tenant_id}/items/{item_id}/views")
def record_item_view(
    item_id: str,
    tenant: Tenant = Depends(require_tenant),
    session: Session = Depends(get_session),
    translator: Translator = Depends(get_translator),
):
    item = repository.increment_knowledge_item_views(session, tenant.id, item_id)
    if item is None:
        raise _item_not_found(translator)
    return {"id": item.id, "views": item.views}
