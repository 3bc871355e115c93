from __future__ import annotations

from fastapi import APIRouter

from . import imports, knowledge, system
from .dependencies import get_knowledge_store, get_translator, require_tenant
from .utils import import_error_http_exception, import_result_payload, preview_payload

router = APIRouter()
router.include_router(system.router)
router.include_router(imports.router)
router.include_router(knowledge.router)

__all__ = [
    "router",
    "get_knowledge_store",
    "get_translator",
    "require_tenant",
    "import_error_http_exception",
    "import_result_payload",
    "preview_payload",
]
