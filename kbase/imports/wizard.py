from __future__ import annotations

from typing import Optional

from kbase.imports.models import (
    DuplicateCheckError,
    ImportFileError,
    ImportPreview,
    ImportResult,
    ImportStep,
    InvalidWizardTransition,
    ParsedRow,
)
from kbase.imports.pipeline import prepare_import, run_import
from kbase.imports.store import KnowledgeStore
from kbase.imports.uploads import IMPORT_UPLOAD_MAX_BYTES


class ImportWizard:
    """Drives one import session: upload -> preview -> importing -> complete.

    Each action is only allowed from one step. A failed file selection keeps
    the wizard in ``upload`` with the error recorded on :attr:`error`.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        tenant_id: str,
        *,
        max_bytes: int = IMPORT_UPLOAD_MAX_BYTES,
    ) -> None:
        self._store = store
        self.tenant_id = tenant_id
        self.max_bytes = max_bytes
        self._reset()

    def _reset(self) -> None:
        self.step = ImportStep.UPLOAD
        self.filename: Optional[str] = None
        self.preview: Optional[ImportPreview] = None
        self.result: Optional[ImportResult] = None
        self.error: Optional[Exception] = None

    @property
    def rows(self) -> list[ParsedRow]:
        return self.preview.rows if self.preview else []

    def _require(self, step: ImportStep, action: str) -> None:
        if self.step != step:
            raise InvalidWizardTransition(action, self.step)

    def select_file(self, filename: str, payload: bytes) -> ImportPreview:
        self._require(ImportStep.UPLOAD, "select a file")
        self.error = None
        try:
            preview = prepare_import(
                self._store,
                self.tenant_id,
                filename,
                payload,
                max_bytes=self.max_bytes,
            )
        except (ImportFileError, DuplicateCheckError) as exc:
            self.error = exc
            raise
        self.filename = filename
        self.preview = preview
        self.step = ImportStep.PREVIEW
        return preview

    def back(self) -> None:
        self._require(ImportStep.PREVIEW, "go back")
        self._reset()

    def start_import(self) -> ImportResult:
        self._require(ImportStep.PREVIEW, "start the import")
        assert self.preview is not None
        self.step = ImportStep.IMPORTING
        self.result = run_import(self._store, self.tenant_id, self.preview)
        self.step = ImportStep.COMPLETE
        return self.result

    def import_more(self) -> None:
        self._require(ImportStep.COMPLETE, "import more")
        self._reset()
