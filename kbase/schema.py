from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import text

Base = declarative_base()


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    created_at = Column(Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))


class KnowledgeItem(Base):
    __tablename__ = "knowledge_items"

    id = Column(Text, primary_key=True)
    tenant_id = Column(
        Text, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    category = Column(Text, nullable=False, server_default=text("'General'"))
    subcategory = Column(Text, nullable=False, server_default=text("''"))
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    keywords = Column(Text, nullable=False, server_default=text("''"))
    image = Column(Text, nullable=False, server_default=text("''"))
    video = Column(Text, nullable=False, server_default=text("''"))
    views = Column(Integer, nullable=False, server_default=text("0"))
    created_at = Column(Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        Index("ix_knowledge_items_tenant_id", "tenant_id"),
    )
