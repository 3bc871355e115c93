from .knowledge import (
    bulk_create_knowledge_items,
    count_knowledge_items,
    create_knowledge_item,
    delete_knowledge_item,
    get_knowledge_item,
    increment_knowledge_item_views,
    list_categories,
    list_knowledge_items,
    list_question_texts,
    update_knowledge_item,
)
from .tenants import create_tenant, get_tenant_by_id, get_tenant_by_slug

__all__ = [name for name in globals() if not name.startswith("_")]
