from __future__ import annotations

import pytest

from kbase.imports import (
    DuplicateCheckError,
    ImportErrorKind,
    ImportFileError,
    ImportStep,
    ImportWizard,
    InvalidWizardTransition,
)
from kbase.imports.uploads import IMPORT_UPLOAD_MAX_BYTES

HEADER = "question,answer,category,subcategory,keywords,image,video"


@pytest.fixture
def wizard(fake_store) -> ImportWizard:
    return ImportWizard(fake_store, "tenant-1")


def _mixed_file(_csv_bytes) -> bytes:
    return _csv_bytes(
        HEADER,
        "How do I pay?,By card,Billing,,payment card,,",
        "Can I get a refund?,Within 30 days,Billing,,,,",
        "Where is my invoice?,,Billing,,,,",
        "reset password ,Use the link,,,,,",
    )


def test_header_only_file_stays_on_upload(wizard, fake_store, _csv_bytes) -> None:
    with pytest.raises(ImportFileError) as excinfo:
        wizard.select_file("faq.csv", _csv_bytes(HEADER))

    assert excinfo.value.kind == ImportErrorKind.EMPTY_FILE
    assert wizard.step == ImportStep.UPLOAD
    assert wizard.error is excinfo.value
    assert fake_store.lookups == []


def test_pdf_is_rejected_without_parsing(wizard) -> None:
    with pytest.raises(ImportFileError) as excinfo:
        wizard.select_file("manual.pdf", b"%PDF-1.7")

    assert excinfo.value.kind == ImportErrorKind.INVALID_FORMAT
    assert wizard.step == ImportStep.UPLOAD


def test_oversized_file_is_rejected_without_parsing(wizard) -> None:
    with pytest.raises(ImportFileError) as excinfo:
        wizard.select_file("faq.csv", b"x" * (IMPORT_UPLOAD_MAX_BYTES + 1))

    assert excinfo.value.kind == ImportErrorKind.FILE_TOO_LARGE
    assert wizard.step == ImportStep.UPLOAD


def test_preview_then_import_counts_every_row(wizard, fake_store, _csv_bytes) -> None:
    fake_store.existing = ["Reset Password"]

    preview = wizard.select_file("faq.csv", _mixed_file(_csv_bytes))

    assert wizard.step == ImportStep.PREVIEW
    assert (preview.valid_count, preview.duplicate_count, preview.invalid_count) == (2, 1, 1)

    result = wizard.start_import()

    assert wizard.step == ImportStep.COMPLETE
    assert wizard.result is result
    assert (result.success, result.skipped, result.failed) == (2, 1, 1)
    assert result.success + result.skipped + result.failed == preview.total
    assert [item.question for item in fake_store.batches[0][1]] == [
        "How do I pay?",
        "Can I get a refund?",
    ]


def test_batch_failure_still_completes(wizard, fake_store, _csv_bytes) -> None:
    fake_store.batch_error = RuntimeError("database is locked")
    wizard.select_file("faq.csv", _csv_bytes(HEADER, "Q1,A1,,,,,", "Q2,A2,,,,,"))

    result = wizard.start_import()

    assert wizard.step == ImportStep.COMPLETE
    assert result.success == 0
    assert result.failed == 2
    assert result.errors[0].row == 0
    assert result.errors[0].message == "database is locked"


def test_duplicate_check_failure_halts_before_preview(wizard, fake_store, _csv_bytes) -> None:
    fake_store.lookup_error = ConnectionError("timeout")

    with pytest.raises(DuplicateCheckError):
        wizard.select_file("faq.csv", _csv_bytes(HEADER, "Q1,A1,,,,,"))

    assert wizard.step == ImportStep.UPLOAD
    assert isinstance(wizard.error, DuplicateCheckError)
    assert fake_store.batches == []


def test_reimporting_same_file_classifies_rows_as_duplicates(wizard, fake_store, _csv_bytes) -> None:
    payload = _csv_bytes(HEADER, "Q1,A1,,,,,", "Q2,A2,,,,,")
    wizard.select_file("faq.csv", payload)
    first = wizard.start_import()
    wizard.import_more()

    preview = wizard.select_file("faq.csv", payload)
    second = wizard.start_import()

    assert first.success == 2
    assert preview.duplicate_count == 2
    assert (second.success, second.skipped, second.failed) == (0, 2, 0)
    assert len(fake_store.batches) == 1


def test_back_discards_rows(wizard, _csv_bytes) -> None:
    wizard.select_file("faq.csv", _csv_bytes(HEADER, "Q1,A1,,,,,"))

    wizard.back()

    assert wizard.step == ImportStep.UPLOAD
    assert wizard.rows == []
    assert wizard.filename is None


def test_import_more_resets_state(wizard, _csv_bytes) -> None:
    wizard.select_file("faq.csv", _csv_bytes(HEADER, "Q1,A1,,,,,"))
    wizard.start_import()

    wizard.import_more()

    assert wizard.step == ImportStep.UPLOAD
    assert wizard.result is None
    assert wizard.preview is None


def test_actions_are_rejected_outside_their_step(wizard, _csv_bytes) -> None:
    with pytest.raises(InvalidWizardTransition):
        wizard.start_import()
    with pytest.raises(InvalidWizardTransition):
        wizard.back()
    with pytest.raises(InvalidWizardTransition):
        wizard.import_more()

    wizard.select_file("faq.csv", _csv_bytes(HEADER, "Q1,A1,,,,,"))
    with pytest.raises(InvalidWizardTransition):
        wizard.select_file("faq.csv", _csv_bytes(HEADER, "Q1,A1,,,,,"))

    wizard.start_import()
    with pytest.raises(InvalidWizardTransition) as excinfo:
        wizard.start_import()
    assert excinfo.value.step == ImportStep.COMPLETE
