from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from kbase.models import KnowledgeItemDraft


class ImportStep(str, Enum):
    UPLOAD = "upload"
    PREVIEW = "preview"
    IMPORTING = "importing"
    COMPLETE = "complete"


class ImportErrorKind(str, Enum):
    INVALID_FORMAT = "InvalidFormat"
    FILE_TOO_LARGE = "FileTooLarge"
    EMPTY_FILE = "EmptyFile"
    PARSE_ERROR = "ParseError"


@dataclass
class RawRow:
    row_index: int
    values: dict[str, str]


@dataclass
class RawTable:
    headers: list[str] = field(default_factory=list)
    rows: list[RawRow] = field(default_factory=list)


@dataclass
class ParsedRow:
    row_index: int
    data: KnowledgeItemDraft
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    is_duplicate: bool = False

    @property
    def is_importable(self) -> bool:
        return self.is_valid and not self.is_duplicate


@dataclass(frozen=True)
class ImportRowError:
    row: int
    message: str


@dataclass(frozen=True)
class ImportResult:
    success: int = 0
    skipped: int = 0
    failed: int = 0
    errors: tuple[ImportRowError, ...] = ()

    @property
    def total(self) -> int:
        return self.success + self.skipped + self.failed


@dataclass
class ImportPreview:
    filename: str
    rows: list[ParsedRow] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.rows)

    @property
    def valid_count(self) -> int:
        return sum(1 for row in self.rows if row.is_importable)

    @property
    def invalid_count(self) -> int:
        return sum(1 for row in self.rows if not row.is_valid)

    @property
    def duplicate_count(self) -> int:
        return sum(1 for row in self.rows if row.is_duplicate)


class ImportFileError(Exception):
    """A file was rejected before any row could be imported."""

    def __init__(self, message: str, kind: ImportErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class DuplicateCheckError(Exception):
    """The existing-question lookup failed; the import cannot continue."""


class InvalidWizardTransition(Exception):
    def __init__(self, action: str, step: ImportStep) -> None:
        super().__init__(f"Cannot {action} while the import is in the '{step.value}' step.")
        self.action = action
        self.step = step
