from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CATEGORY = "General"


@dataclass
class Tenant:
    id: str
    name: str
    slug: str


@dataclass
class KnowledgeItemDraft:
    """A knowledge item before the store assigns its ``id`` and ``views``."""

    question: str
    answer: str
    category: str = DEFAULT_CATEGORY
    subcategory: str = ""
    keywords: str = ""
    image: str = ""
    video: str = ""


@dataclass
class KnowledgeItem:
    id: str
    tenant_id: str
    category: str
    subcategory: str
    question: str
    answer: str
    keywords: str
    image: str
    video: str
    views: int
    created_at: str


@dataclass
class CategorySummary:
    category: str
    subcategories: list[str]
    item_count: int
