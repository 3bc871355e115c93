from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "ar")
FALLBACK_LANGUAGE = "en"

# Leaves map a language code to text; inner nodes map a key segment to a node.
TranslationNode = Mapping[str, Union[str, "TranslationNode"]]

TRANSLATIONS: dict[str, dict[str, dict[str, str]]] = {
    "bulkImport": {
        "invalidFormat": {
            "en": "Unsupported file format. Please use CSV or XLSX.",
            "ar": "صيغة الملف غير مدعومة. يرجى استخدام CSV أو XLSX.",
        },
        "fileTooLarge": {
            "en": "File is too large. Maximum size is {limit}.",
            "ar": "الملف كبير جداً. الحد الأقصى للحجم هو {limit}.",
        },
        "emptyFile": {
            "en": "The file is empty or contains only the header row.",
            "ar": "الملف فارغ أو يحتوي على صف العناوين فقط.",
        },
        "parseError": {
            "en": "Could not read the file. Please check its format and try again.",
            "ar": "تعذرت قراءة الملف. يرجى التحقق من صيغته والمحاولة مرة أخرى.",
        },
        "duplicateCheckFailed": {
            "en": "Could not check for existing questions. Please try again later.",
            "ar": "تعذر التحقق من الأسئلة الموجودة. يرجى المحاولة لاحقاً.",
        },
    },
    "tenants": {
        "notFound": {
            "en": "Knowledge base not found.",
            "ar": "قاعدة المعرفة غير موجودة.",
        },
    },
    "knowledgeItems": {
        "notFound": {
            "en": "Question not found.",
            "ar": "السؤال غير موجود.",
        },
    },
}


def normalize_language(value: Optional[str], default: str = FALLBACK_LANGUAGE) -> str:
    if not value:
        return default
    language = value.strip().lower().split("-", 1)[0]
    return language if language in SUPPORTED_LANGUAGES else default


class Translator:
    """Resolves dotted keys such as ``bulkImport.emptyFile``.

    Missing languages fall back to English and missing keys fall back to the
    key itself, so lookups never raise.
    """

    def __init__(self, language: str = FALLBACK_LANGUAGE, table: Optional[TranslationNode] = None) -> None:
        self.language = normalize_language(language)
        self._table: TranslationNode = TRANSLATIONS if table is None else table

    def t(self, key: str, **params: object) -> str:
        node: Union[str, TranslationNode] = self._table
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                logger.debug("Translation missing for key %s", key)
                return key
            node = node[part]
        if not isinstance(node, Mapping):
            return key
        text = node.get(self.language) or node.get(FALLBACK_LANGUAGE)
        if not isinstance(text, str):
            return key
        return text.format(**params) if params else text
