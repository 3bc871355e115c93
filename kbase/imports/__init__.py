from kbase.imports.duplicates import check_duplicates, find_duplicates, mark_duplicates
from kbase.imports.executor import execute_import
from kbase.imports.models import (
    DuplicateCheckError,
    ImportErrorKind,
    ImportFileError,
    ImportPreview,
    ImportResult,
    ImportRowError,
    ImportStep,
    InvalidWizardTransition,
    ParsedRow,
    RawRow,
)
from kbase.imports.parsers import TEMPLATE_COLUMNS, CsvParser, XlsxParser, parse_upload
from kbase.imports.pipeline import prepare_import, run_import
from kbase.imports.store import KnowledgeStore, SqlKnowledgeStore
from kbase.imports.validator import normalize_question, validate_row, validate_rows
from kbase.imports.wizard import ImportWizard

__all__ = [
    "CsvParser",
    "XlsxParser",
    "TEMPLATE_COLUMNS",
    "parse_upload",
    "validate_row",
    "validate_rows",
    "normalize_question",
    "find_duplicates",
    "mark_duplicates",
    "check_duplicates",
    "execute_import",
    "prepare_import",
    "run_import",
    "KnowledgeStore",
    "SqlKnowledgeStore",
    "ImportWizard",
    "ImportStep",
    "ImportErrorKind",
    "ImportFileError",
    "DuplicateCheckError",
    "InvalidWizardTransition",
    "ImportPreview",
    "ImportResult",
    "ImportRowError",
    "ParsedRow",
    "RawRow",
]
