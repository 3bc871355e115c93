from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from kbase import schema as db_schema
from kbase.models import Tenant


def _to_tenant(model: db_schema.Tenant) -> Tenant:
    return Tenant(id=str(model.id), name=str(model.name), slug=str(model.slug))


def create_tenant(
    session: Session, name: str, slug: str, tenant_id: Optional[str] = None
) -> Tenant:
    model = db_schema.Tenant(id=tenant_id or str(uuid.uuid4()), name=name, slug=slug)
    try:
        session.add(model)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return _to_tenant(model)


def get_tenant_by_id(session: Session, tenant_id: str) -> Optional[Tenant]:
    model = session.get(db_schema.Tenant, tenant_id)
    return _to_tenant(model) if model else None


def get_tenant_by_slug(session: Session, slug: str) -> Optional[Tenant]:
    model = session.scalars(
        select(db_schema.Tenant).where(db_schema.Tenant.slug == slug)
    ).first()
    return _to_tenant(model) if model else None
