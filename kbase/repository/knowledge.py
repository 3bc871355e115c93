from __future__ import annotations

import uuid
from typing import Iterator, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from kbase import schema as db_schema
from kbase.models import CategorySummary, KnowledgeItem, KnowledgeItemDraft


def _to_item(model: db_schema.KnowledgeItem) -> KnowledgeItem:
    return KnowledgeItem(
        id=str(model.id),
        tenant_id=str(model.tenant_id),
        category=str(model.category),
        subcategory=model.subcategory or "",
        question=str(model.question),
        answer=str(model.answer),
        keywords=model.keywords or "",
        image=model.image or "",
        video=model.video or "",
        views=int(model.views or 0),
        created_at=str(model.created_at),
    )


def _to_model(tenant_id: str, draft: KnowledgeItemDraft) -> db_schema.KnowledgeItem:
    return db_schema.KnowledgeItem(
        id=str(uuid.uuid4()),
        tenant_id=tenant_id,
        category=draft.category,
        subcategory=draft.subcategory,
        question=draft.question,
        answer=draft.answer,
        keywords=draft.keywords,
        image=draft.image,
        video=draft.video,
        views=0,
    )


def create_knowledge_item(
    session: Session, tenant_id: str, draft: KnowledgeItemDraft
) -> KnowledgeItem:
    model = _to_model(tenant_id, draft)
    try:
        session.add(model)
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(model)
    return _to_item(model)


def bulk_create_knowledge_items(
    session: Session, tenant_id: str, drafts: Sequence[KnowledgeItemDraft]
) -> int:
    """Insert all drafts in one transaction; nothing is kept if any insert fails."""
    models = [_to_model(tenant_id, draft) for draft in drafts]
    try:
        session.add_all(models)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return len(models)


def list_knowledge_items(session: Session, tenant_id: str) -> list[KnowledgeItem]:
    models = session.scalars(
        select(db_schema.KnowledgeItem)
        .where(db_schema.KnowledgeItem.tenant_id == tenant_id)
        .order_by(
            db_schema.KnowledgeItem.created_at.desc(),
            db_schema.KnowledgeItem.question,
        )
    ).all()
    return [_to_item(model) for model in models]


def list_question_texts(session: Session, tenant_id: str) -> Iterator[str]:
    yield from session.scalars(
        select(db_schema.KnowledgeItem.question).where(
            db_schema.KnowledgeItem.tenant_id == tenant_id
        )
    )


def count_knowledge_items(session: Session, tenant_id: str) -> int:
    total = session.scalar(
        select(func.count())
        .select_from(db_schema.KnowledgeItem)
        .where(db_schema.KnowledgeItem.tenant_id == tenant_id)
    )
    return int(total or 0)


def _get_model(
    session: Session, tenant_id: str, item_id: str
) -> Optional[db_schema.KnowledgeItem]:
    return session.scalars(
        select(db_schema.KnowledgeItem).where(
            db_schema.KnowledgeItem.id == item_id,
            db_schema.KnowledgeItem.tenant_id == tenant_id,
        )
    ).first()


def get_knowledge_item(session: Session, tenant_id: str, item_id: str) -> Optional[KnowledgeItem]:
    model = _get_model(session, tenant_id, item_id)
    return _to_item(model) if model else None


def update_knowledge_item(
    session: Session,
    tenant_id: str,
    item_id: str,
    question: Optional[str] = None,
    answer: Optional[str] = None,
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    keywords: Optional[str] = None,
    image: Optional[str] = None,
    video: Optional[str] = None,
) -> Optional[KnowledgeItem]:
    """Apply the given fields; ``None`` leaves a field unchanged."""
    model = _get_model(session, tenant_id, item_id)
    if model is None:
        return None
    changes = {
        "question": question,
        "answer": answer,
        "category": category,
        "subcategory": subcategory,
        "keywords": keywords,
        "image": image,
        "video": video,
    }
    for field_name, value in changes.items():
        if value is not None:
            setattr(model, field_name, value)
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(model)
    return _to_item(model)


def delete_knowledge_item(session: Session, tenant_id: str, item_id: str) -> bool:
    result = session.execute(
        delete(db_schema.KnowledgeItem).where(
            db_schema.KnowledgeItem.id == item_id,
            db_schema.KnowledgeItem.tenant_id == tenant_id,
        )
    )
    session.commit()
    return bool(result.rowcount)


def increment_knowledge_item_views(
    session: Session, tenant_id: str, item_id: str
) -> Optional[KnowledgeItem]:
    result = session.execute(
        update(db_schema.KnowledgeItem)
        .where(
            db_schema.KnowledgeItem.id == item_id,
            db_schema.KnowledgeItem.tenant_id == tenant_id,
        )
        .values(views=db_schema.KnowledgeItem.views + 1)
        .execution_options(synchronize_session="fetch")
    )
    session.commit()
    if not result.rowcount:
        return None
    return get_knowledge_item(session, tenant_id, item_id)


def list_categories(session: Session, tenant_id: str) -> list[CategorySummary]:
    rows = session.execute(
        select(db_schema.KnowledgeItem.category, db_schema.KnowledgeItem.subcategory)
        .where(db_schema.KnowledgeItem.tenant_id == tenant_id)
        .order_by(db_schema.KnowledgeItem.category, db_schema.KnowledgeItem.subcategory)
    ).all()
    summaries: dict[str, CategorySummary] = {}
    for category, subcategory in rows:
        summary = summaries.setdefault(
            category, CategorySummary(category=category, subcategories=[], item_count=0)
        )
        summary.item_count += 1
        if subcategory and subcategory not in summary.subcategories:
            summary.subcategories.append(subcategory)
    return list(summaries.values())
