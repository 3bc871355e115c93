from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from kbase.models import DEFAULT_CATEGORY, KnowledgeItemDraft


def _required_text(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


class ImportRowErrorPayload(BaseModel):
    row: int = Field(ge=0)
    message: str


class KnowledgeItemCreate(BaseModel):
    question: str
    answer: str
    category: str = DEFAULT_CATEGORY
    subcategory: str = ""
    keywords: str = ""
    image: str = ""
    video: str = ""

    @field_validator("question")
    @classmethod
    def require_question(cls, value: str) -> str:
        return _required_text(value, "Question")

    @field_validator("answer")
    @classmethod
    def require_answer(cls, value: str) -> str:
        return _required_text(value, "Answer")

    @field_validator("category")
    @classmethod
    def default_category(cls, value: str) -> str:
        return value.strip() or DEFAULT_CATEGORY

    @field_validator("subcategory", "keywords", "image", "video")
    @classmethod
    def strip_optional(cls, value: str) -> str:
        return value.strip()

    def to_draft(self) -> KnowledgeItemDraft:
        return KnowledgeItemDraft(**self.model_dump())


class KnowledgeItemUpdate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    keywords: Optional[str] = None
    image: Optional[str] = None
    video: Optional[str] = None

    @field_validator("question")
    @classmethod
    def require_question(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _required_text(value, "Question")

    @field_validator("answer")
    @classmethod
    def require_answer(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _required_text(value, "Answer")

    @field_validator("category")
    @classmethod
    def default_category(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or DEFAULT_CATEGORY

    @field_validator("subcategory", "keywords", "image", "video")
    @classmethod
    def strip_optional(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else value.strip()
